import streamlit as st
import requests
import os

# Configuration
API_BASE_URL = os.getenv("API_URL", "http://127.0.0.1:8000").rstrip("/")
API_DOCS_URL = os.getenv("API_DOCS_URL", f"{API_BASE_URL}/docs")
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "30"))

st.set_page_config(page_title="Random Baking Thing", layout="wide")


def api_get(path, **params):
    response = requests.get(f"{API_BASE_URL}{path}", params=params, timeout=REQUEST_TIMEOUT)
    response.raise_for_status()
    return response


def load_recipe(recipe_id=None):
    """Fetch a recipe (deep link or random) and sync the ?recipe= query param."""
    params = {"recipe": recipe_id} if recipe_id else {}
    recipe = api_get("/api/recipe", **params).json()
    st.session_state["recipe"] = recipe
    st.query_params["recipe"] = recipe["id"]
    return recipe


def new_recipe():
    st.session_state.pop("recipe", None)
    st.query_params.clear()
    load_recipe()


def toggle_step(recipe_id, index):
    requests.post(
        f"{API_BASE_URL}/api/recipes/{recipe_id}/progress/{index}/toggle",
        timeout=REQUEST_TIMEOUT
    ).raise_for_status()


def render_error(message):
    st.error(f"Oops! Something went wrong: {message}")
    if st.button("Try Again", type="primary"):
        new_recipe()
        st.rerun()


col1, col2 = st.columns([5, 1])
with col1:
    st.title("🍰 Random Baking Thing")
with col2:
    st.link_button("API Docs", API_DOCS_URL, type="secondary", use_container_width=True)

recipe = st.session_state.get("recipe")
try:
    if recipe is None or recipe["id"] != st.query_params.get("recipe", recipe["id"]):
        with st.spinner("Finding a delicious dessert recipe..."):
            recipe = load_recipe(st.query_params.get("recipe"))
except requests.exceptions.ConnectionError:
    render_error("Could not connect to the API. Is the backend running? (`uvicorn app.main:app`)")
    st.stop()
except requests.exceptions.RequestException as e:
    render_error(str(e))
    st.stop()

image_col, detail_col = st.columns([2, 3])

with image_col:
    st.image(recipe["image"], use_container_width=True)
    meta = [recipe.get("category") or "", recipe.get("area") or ""]
    meta += recipe.get("tags") or []
    st.caption(" • ".join(m for m in meta if m))

    if st.button("🔄 New Recipe", type="primary", use_container_width=True):
        new_recipe()
        st.rerun()
    if recipe.get("youtube_url"):
        st.link_button("▶️ Watch Video", recipe["youtube_url"], use_container_width=True)

    try:
        copy_text = api_get(f"/api/recipes/{recipe['id']}/export", style="copy").text
        download = api_get(f"/api/recipes/{recipe['id']}/export", style="download")
        disposition = download.headers.get("Content-Disposition", "")
        file_name = disposition.split("filename=")[-1].strip('"') or "recipe.txt"
        st.download_button(
            "⬇️ Download",
            data=download.text,
            file_name=file_name,
            mime="text/plain",
            use_container_width=True
        )
        with st.expander("📋 Copy Recipe", expanded=False):
            st.code(copy_text, language=None)
    except requests.exceptions.RequestException as e:
        st.warning(f"Export unavailable: {e}")

with detail_col:
    st.header(recipe["name"])

    st.subheader("Ingredients")
    for ing in recipe["ingredients"]:
        measure = f"**{ing['measure']}** " if ing.get("measure") else ""
        st.markdown(f"- {measure}{ing['name']}")

    st.subheader("Instructions")
    try:
        progress = api_get(f"/api/recipes/{recipe['id']}/progress").json()
        done = set(progress["completed"])
        for i, step in enumerate(progress["steps"]):
            st.checkbox(
                f"**{i + 1}.** {step}",
                value=i in done,
                key=f"step-{recipe['id']}-{i}",
                on_change=toggle_step,
                args=(recipe["id"], i)
            )
    except requests.exceptions.RequestException as e:
        st.warning(f"Could not load step progress: {e}")
        st.write(recipe.get("instructions", ""))

st.divider()
st.caption("Recipe data from [TheMealDB](https://www.themealdb.com/) • Images from Wikimedia Commons")
