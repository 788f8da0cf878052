from fastapi import FastAPI, HTTPException
from pathlib import Path
import json
import os

app = FastAPI(title="Mock Scoring Server", version="1.0.0")
# Support both local development and Docker
DATA_FILE = Path("/scoring_stub/data.json") if os.path.exists("/scoring_stub/data.json") else None

DEFAULT_DATA = {
    "borrowers": [
        {"_id": "b1", "full_name": "Ada Lovelace", "credit_score": 720, "income": 85000},
        {"_id": "b2", "full_name": "Charles Babbage", "credit_score": 580, "income": 32000},
    ],
    "loans": [
        {"_id": "l1", "borrower_id": "b1", "loan_amount": 10000, "term_months": 12, "interest_rate": 5,
         "num_late_payments": 0, "past_due_days": 0, "status": "active"},
        {"_id": "l2", "borrower_id": "b2", "loan_amount": 25000, "term_months": 36, "interest_rate": 14.5,
         "num_late_payments": 4, "past_due_days": 75, "status": "delinquent"},
        {"_id": "l3", "borrower_id": "b9", "loan_amount": 5000, "term_months": 6, "interest_rate": 9,
         "num_late_payments": 1, "past_due_days": 20, "status": "active"},
    ],
}

DATA = json.loads(DATA_FILE.read_text()) if DATA_FILE else DEFAULT_DATA
STATE = {"trained": False}


def _find_loan(loan_id: str) -> dict:
    for loan in DATA["loans"]:
        if loan["_id"] == loan_id:
            return loan
    raise HTTPException(status_code=404, detail="Loan not found")


def _probability(loan: dict) -> float:
    score = 0.1 + 0.08 * loan["num_late_payments"] + 0.004 * loan["past_due_days"]
    return round(min(score, 0.99), 2)


@app.get("/")
def root(): return {"status": "ok"}

@app.get("/borrowers")
def list_borrowers(): return DATA["borrowers"]

@app.get("/loans")
def list_loans(): return DATA["loans"]

@app.post("/train")
def train():
    if not DATA["loans"]:
        raise HTTPException(status_code=400, detail="No loans to train on")
    STATE["trained"] = True
    return {"samples_used": len(DATA["loans"]), "auc": 0.8731}

@app.get("/predict/{loan_id}")
def predict(loan_id: str):
    if not STATE["trained"]:
        raise HTTPException(status_code=400, detail="Model not trained")
    probability = _probability(_find_loan(loan_id))
    return {"probability_default": probability, "label": "risky" if probability >= 0.4 else "safe"}

@app.get("/strategy/{loan_id}")
def strategy(loan_id: str):
    loan = _find_loan(loan_id)
    if loan["past_due_days"] > 60:
        return {"recommended_strategy": "legal-escalation", "risk_level": "high",
                "actions": ["Send final notice", "Refer to collections"]}
    if loan["num_late_payments"] > 0:
        return {"recommended_strategy": "payment-plan", "risk_level": "medium",
                "actions": ["Contact borrower", "Offer plan"]}
    return {"recommended_strategy": "monitor", "risk_level": "low", "actions": ["Send reminder"]}
