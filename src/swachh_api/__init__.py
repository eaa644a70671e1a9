"""HTTP surface of the SwachhBuddy auth service (FastAPI)."""
