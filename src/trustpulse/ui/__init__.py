"""User interface for TrustPulse."""

import subprocess
import sys
from pathlib import Path


def run_streamlit_app():
    """Launch the Streamlit app in a child process."""
    app_path = Path(__file__).parent / "streamlit_app.py"
    subprocess.run([sys.executable, "-m", "streamlit", "run", str(app_path)], check=True)


__all__ = ["run_streamlit_app"]
