import os
import requests
import streamlit as st

from story_backend.orchestrator.utils import md_stories_table, md_story_details

DEFAULT_API_URL = os.getenv("API_URL", "http://localhost:3000/generate-stories")

st.set_page_config(page_title="Jira Story Generator", page_icon="🗂️", layout="wide")
st.title("🗂️ Jira stories from a UI design")

# ----- state -----
if "api_url" not in st.session_state:
    st.session_state.api_url = DEFAULT_API_URL
if "stories" not in st.session_state:
    st.session_state.stories = []
if "source" not in st.session_state:
    st.session_state.source = None

# ----- sidebar -----
with st.sidebar:
    st.header("Settings")
    st.session_state.api_url = st.text_input("API URL", value=st.session_state.api_url, help="e.g. http://localhost:3000/generate-stories")
    if st.button("🔄 Clear results"):
        st.session_state.stories = []
        st.session_state.source = None
        st.success("Cleared.")

def call_api(name: str, data: bytes, mime_type: str):
    r = requests.post(
        st.session_state.api_url,
        files={"image": (name, data, mime_type)},
        timeout=120,
    )
    if r.status_code >= 400:
        try:
            msg = r.json().get("error", r.text)
        except ValueError:
            msg = r.text
        raise requests.HTTPError(f"{r.status_code}: {msg}", response=r)
    return r.json(), r.headers.get("X-Stories-Source")

# ----- upload -----
uploaded = st.file_uploader("UI design image", type=["png", "jpg", "jpeg", "webp", "gif"])
if uploaded is not None:
    st.image(uploaded, caption=uploaded.name, use_container_width=True)
    if st.button("✨ Generate stories", type="primary"):
        with st.spinner("Asking the vision model…"):
            try:
                stories, source = call_api(uploaded.name, uploaded.getvalue(), uploaded.type or "image/png")
                st.session_state.stories = stories
                st.session_state.source = source
            except requests.RequestException as e:
                st.error(f"API call failed: {e}\nIs the API URL correct and uvicorn running?")

# ----- results -----
if st.session_state.stories:
    if st.session_state.source == "fallback":
        st.warning("The model reply could not be used; showing the default story set.")
    st.markdown(md_stories_table(st.session_state.stories))
    for story in st.session_state.stories:
        if isinstance(story, dict):
            with st.expander(story.get("summary", "Story")):
                st.markdown(md_story_details(story))
    with st.expander("🔍 Raw JSON"):
        st.json(st.session_state.stories)
