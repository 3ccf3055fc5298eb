"""Prompt template for fact-sheet generation.

The template is a module constant so the Streamlit page can show the exact
instruction sent to the model.  ``{person_name}`` is the only variable; the
literal JSON braces are doubled for ``str.format``.
"""

FACT_SHEET_PROMPT_TEMPLATE = """\
Generate a fact sheet for "{person_name}".
Imagine you have searched Wikipedia, LinkedIn and Google Scholar for information about this person.
Based on publicly available information (or typical information found for a public figure if this person is not widely known or is fictional), provide a summary in the following JSON format.
Ensure all fields in the JSON are populated.

The JSON output MUST follow this structure EXACTLY:
{{
  "primaryConnections": ["Connection 1 (e.g., Colleague at Company X, Co-founder of Y)", "Connection 2 (e.g., Mentor Z)", "..."],
  "education": ["Degree in Subject from University A (Year)", "PhD in Another Subject from University B (Year)", "..."],
  "keyMembershipsAwards": ["Member of Organization C", "Recipient of Award D (Year)", "Fellow of Institute E", "..."],
  "tenThings": [
    "A relevant fact about the person.",
    "Another interesting detail concerning the person.",
    "A key achievement or characteristic.",
    "Information regarding their background or career.",
    "A notable event or contribution.",
    "A public perception or well-known aspect.",
    "A less common but significant piece of information.",
    "A point related to their impact or influence.",
    "A specific skill or expertise.",
    "A concluding important fact about them."
  ]
}}

Provide at least 2-3 items for connections, education, and memberships/awards if possible.
Provide exactly 10 concise and interesting facts for the 'tenThings' array. Each fact in 'tenThings' MUST be about or directly relate to "{person_name}".
Do not include any introductory text or explanations outside the JSON structure itself.
"""


def build_fact_sheet_prompt(person_name: str) -> str:
    """Return the generation instruction for *person_name*.

    Double quotes in the name are swapped for single quotes so the name
    cannot close the quoted string it is embedded in.
    """
    safe_name = person_name.strip().replace('"', "'")
    return FACT_SHEET_PROMPT_TEMPLATE.format(person_name=safe_name)
