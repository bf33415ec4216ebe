"""Summarization prompt templates."""

SUMMARIZE_EMAIL_SYSTEM = (
    "You are an assistant that summarizes emails. Return a concise summary in plain text."
)

SUMMARIZE_EMAIL_USER = """Summarize this email (HTML allowed):

{content}"""
