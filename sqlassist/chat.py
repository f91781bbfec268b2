import json
import time
from typing import Literal

from sqlassist.models import ChatMessage, InferResult


def new_message(role: Literal["user", "assistant"], content: str, history: list[ChatMessage]) -> ChatMessage:
    """Append a message with an id that keeps increasing within `history`"""
    next_id = int(time.time() * 1000)
    if history and history[-1].id >= next_id:
        next_id = history[-1].id + 1
    message = ChatMessage(id=next_id, role=role, content=content)
    history.append(message)
    return message


def format_infer_response(result: InferResult) -> str:
    """Assistant reply for an /infer or /speech-infer result"""
    text = ""

    if result.transcript:
        text += f"🎙️ Heard: \"{result.transcript}\"\n\n"

    if result.best_exec_ok:
        text += "✅ The query ran successfully.\n\n"
    else:
        text += "⚠️ There was an error running the query.\n\n"

    if result.best_sql:
        text += f"Generated SQL:\n{result.best_sql}\n\n"

    if result.best_rows_preview:
        text += "Row preview:\n"
        text += "\n".join(json.dumps(row, default=str) for row in result.best_rows_preview)
        text += "\n\n"

    if result.best_exec_error:
        text += f"Error:\n{result.best_exec_error}"

    return text
