import os
import requests
import streamlit as st
import pandas as pd

BACKEND_URL = os.getenv("BACKEND_URL", "http://127.0.0.1:8000")
TIMEOUT = 180

st.set_page_config(page_title="SheetSQL: ask your spreadsheet", layout="wide")
st.title("SheetSQL")


def _session_id() -> str | None:
    sid = st.session_state.get("session_id")
    if sid:
        return sid
    try:
        r = requests.post(f"{BACKEND_URL}/sessions", timeout=TIMEOUT)
        r.raise_for_status()
    except requests.exceptions.RequestException as e:
        st.error(f"Backend error: {e}")
        return None
    sid = r.json()["session_id"]
    st.session_state["session_id"] = sid
    return sid


def _remember(payload: dict) -> None:
    # AskResponse nests the state, other endpoints return it directly
    state = payload.get("state") or payload
    st.session_state["state"] = state
    st.session_state.pop("export", None)


def _call(method: str, path: str, **kwargs) -> dict | None:
    try:
        r = requests.request(method, f"{BACKEND_URL}{path}", timeout=TIMEOUT, **kwargs)
    except requests.exceptions.RequestException as e:
        st.session_state["badge"] = ("error", "API Error")
        st.error(f"Backend error: {e}")
        return None
    if r.status_code == 429:
        st.session_state["badge"] = ("error", "Quota Reached")
        st.warning((r.json() or {}).get("detail", "Quota reached. Please wait and try again."))
        return None
    if r.status_code >= 400:
        detail = r.json().get("detail") if r.headers.get("content-type", "").startswith("application/json") else r.text
        st.session_state["badge"] = ("error", "API Error")
        st.error(f"{r.status_code}: {detail}")
        return None
    st.session_state.pop("badge", None)
    return r.json() or {}


sid = _session_id()

# =========================
# Sidebar: data
# =========================
with st.sidebar:
    st.header("Data")
    if st.button("Load sample", use_container_width=True) and sid:
        payload = _call("POST", f"/sessions/{sid}/sample")
        if payload:
            _remember(payload)

    uploaded = st.file_uploader("CSV or Excel file", type=["csv", "xlsx", "xls"])
    if uploaded is not None and sid and st.session_state.get("uploaded_key") != (uploaded.name, uploaded.size):
        with st.spinner("Building table…"):
            files = {"file": (uploaded.name, uploaded.getvalue(), uploaded.type or "application/octet-stream")}
            payload = _call("POST", f"/sessions/{sid}/upload", files=files)
        st.session_state["uploaded_key"] = (uploaded.name, uploaded.size)
        if payload:
            _remember(payload)

state = st.session_state.get("state") or {}

# Status badge
kind, text = st.session_state.get("badge") or ("info", state.get("status") or "Waiting for data")
if kind == "error":
    st.error(text)
else:
    st.caption(f"Status: **{text}**")

if state.get("loaded"):
    st.caption(f"Table `{state.get('table')}` • Columns: {', '.join(state.get('schema_columns') or [])}")

# =========================
# Question
# =========================
with st.form("ask", clear_on_submit=False):
    question = st.text_input("Ask a question", placeholder="e.g. products with sales above 1000")
    submitted = st.form_submit_button("Run")

if submitted:
    if not state.get("loaded"):
        st.warning("Load the sample or upload a file first.")
    elif question.strip() and sid:
        with st.spinner("Analyzing…"):
            payload = _call("POST", f"/sessions/{sid}/ask", json={"question": question.strip()})
        if payload and not payload.get("stale"):
            _remember(payload)
        state = st.session_state.get("state") or {}

# =========================
# Result
# =========================
if state.get("last_sql"):
    st.code(f"SQL: {state['last_sql']}", language="sql")

view = state.get("view") or {}
if view.get("kind") == "rows":
    st.markdown(f"**{view.get('row_count', 0)} ROWS**")
    st.dataframe(pd.DataFrame(view.get("rows") or [], columns=view.get("columns") or []), use_container_width=True)
elif view.get("kind") == "empty":
    st.markdown("**0 ROWS**")
    st.info(view.get("message") or "No results.")
elif view.get("kind") == "error":
    st.error(view.get("error"))
    st.caption(view.get("message") or "")

if state.get("has_result") and sid:
    if "export" not in st.session_state:
        try:
            r = requests.get(f"{BACKEND_URL}/sessions/{sid}/export", timeout=TIMEOUT)
        except requests.exceptions.RequestException as e:
            st.error(f"Backend error: {e}")
        else:
            if r.status_code == 200:
                disp = r.headers.get("content-disposition", "")
                fname = disp.split("filename=")[-1].strip('"') if "filename=" in disp else "nlp_export.csv"
                st.session_state["export"] = (fname, r.content)
    if "export" in st.session_state:
        fname, data = st.session_state["export"]
        st.download_button("Export CSV", data=data, file_name=fname, mime="text/csv")
