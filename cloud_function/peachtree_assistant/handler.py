import logging

from . import drive_context, llm, prompts, usage_log
from .errors import ClientInputError
from .google_clients import build_sheets, credentials_from_token, exchange_code

logger = logging.getLogger(__name__)

EMPTY_LOG_MESSAGE = "The log sheet is empty or only contains a header. No report to generate."
NO_RECENT_QUESTIONS_MESSAGE = "No questions have been asked in the last 7 days."


def handle_gemini(body: dict) -> dict:
    prompt = body.get("prompt")
    access_token = body.get("accessToken")
    if not prompt or not access_token:
        raise ClientInputError("A prompt and access token are required.")

    creds = credentials_from_token(access_token)
    context = drive_context.load_folder_context(creds)

    answer = llm.generate_text(prompts.build_question_prompt(context, prompt))

    usage_log.log_question(creds, prompt)
    return {"response": answer}


def handle_report(body: dict) -> dict:
    access_token = body.get("accessToken")
    if not access_token:
        raise ClientInputError("Access token required.")

    creds = credentials_from_token(access_token)
    rows = usage_log.fetch_log_rows(build_sheets(creds))
    if len(rows) <= 1:
        return {"report": EMPTY_LOG_MESSAGE}

    questions = usage_log.recent_questions(rows)
    logger.info("%d of %d logged questions fall in the report window", len(questions), len(rows) - 1)
    if not questions:
        return {"report": NO_RECENT_QUESTIONS_MESSAGE}

    return {"report": llm.generate_text(prompts.build_report_prompt(questions))}


def handle_token(body: dict) -> dict:
    code = body.get("code")
    if not code:
        raise ClientInputError("A code is required.")
    return {"accessToken": exchange_code(code)}


HANDLERS = {
    "gemini": handle_gemini,
    "report": handle_report,
    "token": handle_token,
}


def dispatch(body: dict) -> dict:
    """Route a request body to its flow by `type`. Raises ClientInputError for bad input."""
    request_type = body.get("type")
    handler = HANDLERS.get(request_type) if isinstance(request_type, str) else None
    if handler is None:
        raise ClientInputError("A valid request type was not provided.")
    logger.info("Handling %s request", request_type)
    return handler(body)
