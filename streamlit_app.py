# streamlit_app.py
import streamlit as st
import requests
import pandas as pd
from typing import Optional, Dict, Any

from table_agent.config import Settings

API_BASE = Settings.from_env().api_url

st.set_page_config(page_title="Table Agent", layout="wide")
st.title("Table Agent")
st.write("Edit the table with plain-English commands. Type `help` to see the built-in commands.")

STATUS_BADGES = {
    "configured": ("⚡ Groq Enabled", st.success),
    "quota_exceeded": ("⚠️ Quota Exceeded", st.error),
    "not_configured": ("✨ Fallback Mode", st.warning),
}

OPERATORS = {">": "gt", "<": "lt", "=": "eq", ">=": "gte", "<=": "lte"}

# -------------------------
# Helpers
# -------------------------
def api_get(path: str) -> Optional[Dict[str, Any]]:
    try:
        resp = requests.get(f"{API_BASE}{path}", timeout=10)
        resp.raise_for_status()
        return resp.json()
    except requests.RequestException as e:
        st.error(f"Failed to call API: {e}")
        return None

def api_post(path: str, payload: Dict[str, Any], timeout: int = 60) -> Optional[Dict[str, Any]]:
    try:
        resp = requests.post(f"{API_BASE}{path}", json=payload, timeout=timeout)
    except requests.RequestException as e:
        st.error(f"Failed to call API: {e}")
        return None
    if resp.status_code != 200:
        st.error(f"Backend returned error: {resp.status_code}")
        st.code(resp.text)
        return None
    return resp.json()

def view_to_df(view: Dict[str, Any]) -> pd.DataFrame:
    """Displayed rows keyed by their 1-based position in the canonical table."""
    index = [r + 1 for r in view.get("source_rows", [])]
    return pd.DataFrame(view.get("rows", []), columns=view.get("headers", []), index=index or None)

# -------------------------
# Sidebar: provider badge, sort & filter
# -------------------------
if "chat" not in st.session_state:
    st.session_state.chat = []

status = api_get("/status") or {"status": "not_configured"}
table = api_get("/table") or {"headers": [], "rows": []}
headers = table.get("headers", [])

with st.sidebar:
    st.header("Status")
    label, badge = STATUS_BADGES.get(status["status"], STATUS_BADGES["not_configured"])
    badge(label)

    st.header("View")
    view_request: Dict[str, Any] = {}
    if headers:
        sort_col = st.selectbox("Sort by", ["(none)"] + headers)
        if sort_col != "(none)":
            direction = st.radio("Direction", ["asc", "desc"], horizontal=True)
            view_request["sort"] = {"column": headers.index(sort_col), "direction": direction}

        filter_col = st.selectbox("Filter column", ["(none)"] + headers)
        if filter_col != "(none)":
            op = st.selectbox("Operator", list(OPERATORS))
            value = st.number_input("Value", step=1, value=0)
            view_request["filter"] = {"column": headers.index(filter_col), "operator": OPERATORS[op], "value": int(value)}

    if st.button("Reset table"):
        api_post("/table/reset", {})
        st.session_state.chat = []
        st.rerun()

# -------------------------
# Table
# -------------------------
view = api_post("/table/view", view_request)
if view is not None:
    st.subheader("Data")
    st.dataframe(view_to_df(view), use_container_width=True)
    st.caption(f"{len(headers)} columns, {len(table.get('rows', []))} rows")

# -------------------------
# Chat
# -------------------------
st.subheader("Chat")
for entry in st.session_state.chat:
    with st.chat_message(entry["sender"]):
        st.markdown(entry["content"])

command = st.chat_input('e.g. "add row 10, 20, 30"')
if command:
    st.session_state.chat.append({"sender": "user", "content": command})
    with st.spinner("Working on it..."):
        result = api_post("/command", {"text": command})
    reply = result["message"] if result else "Sorry, I encountered an error processing your request. Please try again."
    st.session_state.chat.append({"sender": "assistant", "content": reply})
    st.rerun()
