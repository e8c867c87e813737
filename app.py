"""Entry point for Streamlit (cloud/local).

`streamlit run app.py` and `streamlit run streamlit_app.py` both start the
studio UI.
"""

from streamlit_app import main


if __name__ == "__main__":
    main()
