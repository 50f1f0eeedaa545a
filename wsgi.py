"""WSGI entry point: exposes the Flask app for `flask` CLI commands."""
import sys
import os

# Ensure the project root is in the Python path
sys.path.insert(0, os.path.dirname(__file__))

from salon import create_app

# Create the application instance
app = create_app()
