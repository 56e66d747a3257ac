"""
Student Feedback Analytics Portal frontend package.

The Streamlit page is split into framework-free workflow logic (core),
presentation (ui), and Streamlit glue (utils).
"""
