"""Convenience launcher for the Streamlit app.

Usage:
  streamlit run run_xtime.py

Automatically imports every module in ``xtime_app/pages`` so each page
decorated with ``@register_page`` registers itself without manual edits here.
"""

import logging
from importlib import import_module
from pathlib import Path

import streamlit as st

from xtime_app.app import main

st.set_page_config(page_title="XTime", layout="wide")
logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

PAGES_DIR = Path(__file__).parent / "xtime_app" / "pages"
for py in sorted(PAGES_DIR.glob("[!_]*.py")):
    mod_name = f"xtime_app.pages.{py.stem}"
    try:
        import_module(mod_name)
    except Exception:  # pragma: no cover
        logging.getLogger(__name__).exception("Failed importing page %s", mod_name)

if __name__ == "__main__":
    main()
