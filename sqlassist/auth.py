import re
from typing import Optional

# Bar colors from very weak (0) to very strong (4)
STRENGTH_COLORS = ["#dc2626", "#f97316", "#eab308", "#22c55e", "#16a34a"]
STRENGTH_LABELS = ["Very weak", "Weak", "Fair", "Strong", "Very strong"]


def password_strength(password: str) -> int:
    """Score a password from 0 to 4"""
    if not password:
        return 0

    score = 0
    if len(password) >= 8:
        score += 1
    if len(password) >= 12:
        score += 1
    if re.search(r"[a-z]", password) and re.search(r"[A-Z]", password):
        score += 1
    if re.search(r"\d", password) and re.search(r"[^\w\s]", password):
        score += 1
    return min(score, 4)


def strength_bar(score: int) -> tuple[str, float]:
    """Color and fill fraction for a strength score"""
    score = min(max(score, 0), 4)
    return STRENGTH_COLORS[score], (score + 1) / 5


def validate_registration(email: str, password: str, confirm: str) -> Optional[str]:
    """Error message for the register form, or None when it can be submitted"""
    if not email.strip() or not password:
        return "Email and password are required."
    if password != confirm:
        return "Passwords do not match."
    return None


def greeting(hour: int) -> str:
    if hour < 12:
        return "Good morning"
    if hour < 18:
        return "Good afternoon"
    return "Good evening"


def initial(email: Optional[str]) -> str:
    """Avatar letter for the signed-in user"""
    return email[0].upper() if email else "?"
