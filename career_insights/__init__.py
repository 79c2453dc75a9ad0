"""Career Insights Service: AI-generated industry insights for career profiles"""

__version__ = "1.0.0"
