"""
Prompt templates sent to Gemini.
"""

QUESTION_TEMPLATE = (
    "Based on the following context, please answer the user's question. "
    "If the context does not contain the answer, say so.\n\n"
    "CONTEXT:\n---\n{context}\n---\n\n"
    "QUESTION: {question}"
)

REPORT_TEMPLATE = (
    "As an operations analyst for a Virtual Assistant company, review the following "
    "list of questions asked by our VAs over the last week. Generate a brief, "
    "professional report for management. The report should identify 2-3 key themes "
    "or common areas of confusion, point out potential gaps in our training or "
    "documentation, and suggest specific, actionable improvements.\n\n"
    "Questions Asked This Week:\n{questions}"
)


def build_question_prompt(context: str, question: str) -> str:
    return QUESTION_TEMPLATE.format(context=context, question=question)


def build_report_prompt(questions: list[str]) -> str:
    """One bullet per question, in the order given."""
    bullets = "\n".join(f"- {q}" for q in questions)
    return REPORT_TEMPLATE.format(questions=bullets)
