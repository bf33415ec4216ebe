"""Classification prompt templates."""

# =============================================================================
# EMAIL CLASSIFICATION PROMPTS
# =============================================================================

CLASSIFY_EMAIL_SYSTEM = (
    "Classify the email into labels. Output strict JSON: "
    '{"labels":[{"label":string,"score":number}]} with no extra text.'
)

CLASSIFY_EMAIL_USER = """Classify this email (HTML allowed):

{content}"""
