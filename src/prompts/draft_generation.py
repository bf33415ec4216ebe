"""Reply drafting prompt templates."""

# =============================================================================
# REPLY DRAFT PROMPTS
# =============================================================================

GENERATE_DRAFT_SYSTEM = (
    "Write a polite, concise reply to the user's email. Output only the reply text."
)

GENERATE_DRAFT_USER = """Write a reply to this email (HTML allowed):

{content}"""
