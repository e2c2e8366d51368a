# app/db/seed.py
from sqlalchemy.orm import Session
from sqlalchemy import select
from app.models.question import Question, QuestionCategory, QuestionType

TEXT, NUMBER = QuestionType.TEXT, QuestionType.NUMBER
DEMOGRAPHIC = QuestionCategory.DEMOGRAPHIC
HEALTH = QuestionCategory.HEALTH
FINANCIAL = QuestionCategory.FINANCIAL

SEED_ROWS = [
    ("What is your full name?", "Enter your legal full name", TEXT, DEMOGRAPHIC),
    ("What is your age?", "Your current age in years", NUMBER, DEMOGRAPHIC),
    ("What is your biological sex?", "Select male or female", TEXT, DEMOGRAPHIC),
    ("What is your zip code?", "Your current residential zip code", TEXT, DEMOGRAPHIC),

    ("Do you smoke or use tobacco?", "Yes or no", TEXT, HEALTH),
    ("Do you drink alcohol?", "If yes, how often?", TEXT, HEALTH),
    ("Do you have chronic conditions?", "e.g., Diabetes, Hypertension", TEXT, HEALTH),
    ("Do you require assistance with daily tasks?", "e.g., dressing, bathing", TEXT, HEALTH),
    ("What is your height (in cm)?", "Required for health scoring", NUMBER, HEALTH),
    ("What is your weight (in kg)?", "Required for BMI calculation", NUMBER, HEALTH),

    ("Are you currently insured?", "Do you have any health insurance?", TEXT, FINANCIAL),
    ("What is your total monthly income?", "Approximate after-tax income", NUMBER, FINANCIAL),
    ("What are your average monthly expenses?", "Bills, rent, groceries, etc.", NUMBER, FINANCIAL),
    ("Do you have long-term care insurance?", "Yes, no, or unsure", TEXT, FINANCIAL),
]

def seed_questions(db: Session) -> int:
    # if already seeded, skip
    existing = db.execute(select(Question)).scalars().first()
    if existing:
        return 0
    for title, desc, qtype, category in SEED_ROWS:
        db.add(Question(title=title, description=desc, type=qtype.value, category=category.value))
    db.commit()
    return len(SEED_ROWS)
