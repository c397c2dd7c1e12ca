"""Prompt text and the response schema sent to Gemini."""

SYSTEM_INSTRUCTION_REVIEWER = """
You are a distinguished senior academic reviewer for a top-tier scientific journal.
Your task is to analyze the provided research paper (PDF or text) and generate a structured, rigorous, and constructive peer review.

Focus on:
1. Novelty: Is the work original?
2. Methodology: Are the methods sound, reproducible, and appropriate?
3. Clarity: Is the writing clear and well-structured?
4. Significance: Does this contribute meaningfully to the field?
5. Citations: Is the work well-grounded in existing literature?

You must output PURE JSON matching the specific schema requested. Do not include markdown formatting or code blocks in the JSON output if possible, but the outer wrapper might be a code block.
""".strip()

SYSTEM_INSTRUCTION_CHAT = """
You are a helpful research assistant discussing a specific paper with the user.
The user has just uploaded this paper. You have access to its content.
Answer questions specifically about the paper's content, methodology, results, and implications.
Be precise. Quote sections if necessary.
""".strip()

REVIEW_PROMPT = "Please review this uploaded research paper."

# Seeded chat turns: the document plus priming text, then the model's acknowledgement
CHAT_PRIMING_TEXT = "Here is the paper I would like to discuss."
CHAT_ACKNOWLEDGEMENT = "I have read the paper. What specific questions do you have about it?"

_SCORE = {"type": "NUMBER", "description": "Score from 1-10"}

REVIEW_RESPONSE_SCHEMA: dict = {
    "type": "OBJECT",
    "properties": {
        "title": {"type": "STRING", "description": "The title of the paper"},
        "authors": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "List of authors if detected",
        },
        "summary": {
            "type": "STRING",
            "description": "A concise summary of the paper (max 200 words)",
        },
        "scores": {
            "type": "OBJECT",
            "properties": {
                "novelty": _SCORE,
                "methodology": _SCORE,
                "clarity": _SCORE,
                "significance": _SCORE,
                "citations": _SCORE,
            },
            "required": ["novelty", "methodology", "clarity", "significance", "citations"],
        },
        "strengths": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "List of 3-5 key strengths",
        },
        "weaknesses": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "List of 3-5 key weaknesses",
        },
        "detailedFeedback": {
            "type": "STRING",
            "description": "Detailed qualitative feedback and suggestions for improvement",
        },
        "decision": {
            "type": "STRING",
            "enum": ["Accept", "Minor Revision", "Major Revision", "Reject"],
            "description": "Final recommendation",
        },
    },
    "required": [
        "title",
        "summary",
        "scores",
        "strengths",
        "weaknesses",
        "detailedFeedback",
        "decision",
    ],
}
