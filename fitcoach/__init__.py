"""FitCoach: AI-generated weekly training and nutrition plans."""

from dotenv import load_dotenv

load_dotenv()
