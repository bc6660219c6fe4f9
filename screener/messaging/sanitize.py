# Characters the WhatsApp channel has rejected at render time (Twilio 63013)
_REPLACEMENTS = str.maketrans({
    "—": "-",   # em dash
    "‘": "'",   # left single quote
    "’": "'",   # right single quote
    "“": '"',   # left double quote
    "”": '"',   # right double quote
})


def sanitize(text: str) -> str:
    return (text or "").translate(_REPLACEMENTS)
