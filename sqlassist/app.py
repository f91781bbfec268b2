import logging
from datetime import datetime
from html import escape

import streamlit as st
import streamlit.components.v1 as components

from sqlassist.api import BackendClient
from sqlassist.auth import greeting, initial, password_strength, strength_bar, validate_registration, STRENGTH_LABELS
from sqlassist.chat import format_infer_response, new_message
from sqlassist.diagram import RelationalModel
from sqlassist.diagram_html import schema_to_interactive_html
from sqlassist.errors import BackendError, UnauthorizedError, UploadValidationError
from sqlassist.log import setup_logging
from sqlassist.mermaid import schema_to_mermaid
from sqlassist.upload import ENGINE_LABELS, MODE_HINTS, MODES, accepted_extension, allows_multiple, normalize_engine, validate_upload

setup_logging()
logger = logging.getLogger(__name__)

PROTECTED_PAGES = ["dashboard", "new", "upload", "schema"]


def go(page: str, **state):
    """Switch page and rerun"""
    st.session_state.page = page
    for key, value in state.items():
        st.session_state[key] = value
    st.rerun()


def to_login():
    st.session_state.user = None
    st.session_state.schema = None
    st.session_state.diagram = None
    go("login")


def call_backend(fn, *args):
    """Run a backend call; 401 goes to login, other failures become a message"""
    try:
        return fn(*args)
    except UnauthorizedError:
        to_login()
    except BackendError as e:
        st.session_state.error = e.message
    return None


def show_error():
    if st.session_state.error:
        st.error(st.session_state.error)
        st.session_state.error = None


# ============== STREAMLIT CONFIG ==============

st.set_page_config(
    page_title="SQL Assist",
    page_icon="🗄️",
    layout="wide",
    initial_sidebar_state="collapsed"
)

# ============== CUSTOM CSS ==============

st.markdown("""
<style>
    .main .block-container {
        padding-top: 2rem;
        max-width: 1400px;
    }

    .query-card {
        background: #262626;
        color: white;
        padding: 1rem;
        border-radius: 8px;
        margin-bottom: 0.75rem;
    }

    .query-card .date {
        color: #a3a3a3;
        font-size: 0.85rem;
        margin-top: 0.25rem;
    }

    .strength-track {
        height: 8px;
        width: 100%;
        background: #262626;
        border-radius: 999px;
        overflow: hidden;
    }

    .strength-fill {
        height: 100%;
        border-radius: 999px;
    }

    .avatar {
        width: 36px;
        height: 36px;
        border-radius: 50%;
        background: #404040;
        color: white;
        display: inline-flex;
        align-items: center;
        justify-content: center;
        font-weight: 700;
    }

    #MainMenu {visibility: hidden;}
    footer {visibility: hidden;}
</style>
""", unsafe_allow_html=True)

# ============== INITIALIZE STATE ==============

defaults = {
    "page": "login",
    "client": None,
    "user": None,
    "error": None,
    "notice": None,
    "engine": "postgres",
    "database_id": None,
    "schema": None,
    "diagram": None,
    "messages": [],
    "last_audio": None,
}
for key, value in defaults.items():
    if key not in st.session_state:
        st.session_state[key] = value

if st.session_state.client is None:
    st.session_state.client = BackendClient()

client: BackendClient = st.session_state.client

# Validate the session with /auth/me before any dashboard page
if st.session_state.page in PROTECTED_PAGES and st.session_state.user is None:
    try:
        st.session_state.user = client.me()
    except BackendError:
        to_login()


# ============== PAGES ==============

def login_page():
    st.title("Log in")
    show_error()
    if st.session_state.notice:
        st.success(st.session_state.notice)
        st.session_state.notice = None

    with st.form("login"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Log in", use_container_width=True)

    if submitted:
        try:
            with st.spinner("Logging in..."):
                st.session_state.user = client.login(email, password)
        except BackendError as e:
            st.error(e.message)
        else:
            go("dashboard")

    if st.button("Create an account"):
        go("register")


def register_page():
    st.title("Register")
    show_error()

    email = st.text_input("Email")
    password = st.text_input("Password", type="password")

    if password:
        score = password_strength(password)
        color, fill = strength_bar(score)
        st.markdown(
            f'<div class="strength-track"><div class="strength-fill" '
            f'style="width: {fill * 100:.0f}%; background: {color};"></div></div>',
            unsafe_allow_html=True,
        )
        st.caption(STRENGTH_LABELS[score])

    confirm = st.text_input("Confirm password", type="password")

    if st.button("Register", use_container_width=True):
        error = validate_registration(email, password, confirm)
        if error:
            st.error(error)
            return
        try:
            with st.spinner("Creating account..."):
                client.register(email, password)
        except BackendError as e:
            st.error(e.message)
        else:
            go("login", notice="Account created. You can log in now.")

    if st.button("I already have an account"):
        go("login")


def header():
    user = st.session_state.user
    left, right = st.columns([8, 2])
    with left:
        st.caption(greeting(datetime.now().hour))
        st.markdown(f'<span class="avatar">{escape(initial(user.email))}</span> {escape(user.email)}', unsafe_allow_html=True)
    with right:
        if st.button("Log out", use_container_width=True):
            call_backend(client.logout)
            to_login()
    st.divider()


def dashboard_page():
    header()
    st.title("My queries")
    show_error()

    with st.spinner("Loading history..."):
        history = call_backend(client.history) or []

    if not history:
        st.write("You have no saved queries yet.")
    for item in history:
        try:
            created = datetime.fromisoformat(item.created_at.replace("Z", "+00:00")).strftime("%Y-%m-%d %H:%M")
        except ValueError:
            created = item.created_at
        st.markdown(
            f'<div class="query-card"><strong>🗄️ {escape(item.natural_query)}</strong>'
            f'<div class="date">📅 {created}</div></div>',
            unsafe_allow_html=True,
        )

    if st.button("➕ New query"):
        go("new")


def new_page():
    header()
    st.title("New query")
    st.write("Choose the database engine of your dump.")

    col1, col2 = st.columns(2)
    with col1:
        if st.button("PostgreSQL", use_container_width=True):
            go("upload", engine="postgres")
    with col2:
        if st.button("MySQL", use_container_width=True):
            go("upload", engine="mysql")

    if st.button("Back"):
        go("dashboard")


def upload_page():
    header()
    engine = normalize_engine(st.session_state.engine)

    st.title("Upload database")
    st.caption(f"Selected engine: **{ENGINE_LABELS[engine]}**")
    show_error()

    mode = st.radio(
        "Upload mode",
        list(MODES),
        format_func=lambda m: MODES[m][2],
        horizontal=True,
    )
    st.caption(MODE_HINTS[mode])

    files = st.file_uploader(
        "Select file(s)",
        type=[accepted_extension(mode)],
        accept_multiple_files=allows_multiple(mode),
        key=f"files_{mode}",
    )
    if files is None:
        files = []
    elif not isinstance(files, list):
        files = [files]

    col1, col2 = st.columns(2)
    with col1:
        if st.button("Cancel", use_container_width=True):
            go("dashboard")
    with col2:
        if st.button("Upload and continue", use_container_width=True):
            try:
                validate_upload(mode, [f.name for f in files])
            except UploadValidationError as e:
                st.error(str(e))
                return

            payload = [(f.name, f.getvalue(), f.type or "application/octet-stream") for f in files]
            with st.spinner("Uploading..."):
                database_id = call_backend(client.upload, mode, engine, payload)
            if database_id:
                go("schema", database_id=database_id, schema=None, diagram=None, messages=[])
            st.rerun()


def ask(database_id: str, text: str):
    new_message("user", text, st.session_state.messages)
    with st.spinner("Generating SQL..."):
        result = call_backend(client.infer, database_id, text)
    if result is not None:
        new_message("assistant", format_infer_response(result), st.session_state.messages)


def ask_by_voice(database_id: str, audio):
    with st.spinner("Transcribing..."):
        result = call_backend(client.speech_infer, database_id, ("question.wav", audio.getvalue(), "audio/wav"))
    if result is not None:
        new_message("user", result.transcript or "🎙️ (voice question)", st.session_state.messages)
        new_message("assistant", format_infer_response(result), st.session_state.messages)


def schema_page():
    header()
    database_id = st.session_state.database_id
    if not database_id:
        go("dashboard")

    if st.session_state.schema is None:
        with st.spinner("Loading schema..."):
            schema = call_backend(client.schema, database_id)
        if schema is None:
            show_error()
            st.error("Could not load the schema.")
            return
        st.session_state.schema = schema
        # New schema data: layout and view start over
        st.session_state.diagram = RelationalModel(schema.tables, schema.relationships)

    schema = st.session_state.schema
    diagram: RelationalModel = st.session_state.diagram

    st.title(f"🗄️ {schema.db_name}")
    show_error()

    schema_tab, model_tab = st.tabs(["Schema", "Relational model"])

    with schema_tab:
        browser, chat = st.columns([4, 6])

        with browser:
            st.subheader("Tables")
            for table in schema.tables:
                with st.expander(table.name):
                    for col in table.columns:
                        pk = " 🔑" if col.is_primary else ""
                        st.markdown(f"`{col.name}` ({col.type}){pk}")

        with chat:
            st.subheader("Ask in natural language")
            for msg in st.session_state.messages:
                with st.chat_message(msg.role):
                    st.text(msg.content)

            audio = st.audio_input("Ask by voice")
            # The widget keeps returning the last recording on every rerun
            if audio is not None and audio.file_id != st.session_state.last_audio:
                st.session_state.last_audio = audio.file_id
                ask_by_voice(database_id, audio)
                st.rerun()

    with model_tab:
        # Zoom lives inside the diagram page; a rerun would redraw it from
        # the Python state and lose positions dragged in the browser
        if st.button("Reset layout"):
            diagram.mount(schema.tables, schema.relationships)

        html = schema_to_interactive_html(diagram, schema.db_name)
        components.html(html, height=600, scrolling=False)

        with st.expander("View Mermaid Code"):
            st.code(schema_to_mermaid(schema.tables, schema.relationships), language="text")

        st.download_button(
            label="Download diagram (HTML)",
            data=html,
            file_name=f"{schema.db_name}_diagram.html",
            mime="text/html",
            use_container_width=True
        )

    question = st.chat_input("Write your question...")
    if question and question.strip():
        ask(database_id, question.strip())
        st.rerun()


PAGES = {
    "login": login_page,
    "register": register_page,
    "dashboard": dashboard_page,
    "new": new_page,
    "upload": upload_page,
    "schema": schema_page,
}

logger.debug("rendering page %s", st.session_state.page)
PAGES.get(st.session_state.page, login_page)()
