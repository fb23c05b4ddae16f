#!/usr/bin/env python
"""
Case Graph Explorer - Streamlit entrypoint.
Run with: streamlit run app.py
Version: 1.0.0
"""

from casegraph.ui import render_app


def main() -> None:
    render_app()


if __name__ == "__main__":
    main()
