from sqlassist.chat import format_infer_response, new_message
from sqlassist.models import InferResult


def test_successful_query():
    result = InferResult(
        best_sql="SELECT name FROM users",
        best_exec_ok=True,
        best_rows_preview=[["ana"], ["luis"]],
    )

    text = format_infer_response(result)

    assert text.startswith("✅ The query ran successfully.")
    assert "Generated SQL:\nSELECT name FROM users" in text
    assert 'Row preview:\n["ana"]\n["luis"]' in text
    assert "Error:" not in text


def test_failed_query():
    result = InferResult(best_sql="SELECT x", best_exec_ok=False, best_exec_error="column x does not exist")

    text = format_infer_response(result)

    assert text.startswith("⚠️ There was an error running the query.")
    assert text.endswith("Error:\ncolumn x does not exist")


def test_empty_response():
    text = format_infer_response(InferResult.model_validate({"best_exec_ok": None, "best_rows_preview": None}))

    assert "error running the query" in text
    assert "Generated SQL" not in text


def test_transcript_is_shown():
    text = format_infer_response(InferResult(best_exec_ok=True, transcript="how many users"))

    assert text.startswith('🎙️ Heard: "how many users"')


def test_message_ids_increase():
    history = []
    first = new_message("user", "hola", history)
    second = new_message("assistant", "hi", history)

    assert [m.role for m in history] == ["user", "assistant"]
    assert second.id > first.id
