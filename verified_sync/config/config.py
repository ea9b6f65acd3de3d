"""
Configuration module.

Values are read from the environment (optionally from a .env file) once at
import time and exposed as module constants.
"""

import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


# GitHub API configuration
GITHUB_TOKEN = os.getenv("GITHUB_TOKEN")
GITHUB_API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com")
GITHUB_API_VERSION = os.getenv("GITHUB_API_VERSION", "2022-11-28")
REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "150"))
CONNECT_TIMEOUT_SECONDS = float(os.getenv("CONNECT_TIMEOUT_SECONDS", "60"))

# Local repository configuration
# The checkout action names the remote "origin"
GIT_REMOTE_NAME = os.getenv("GIT_REMOTE_NAME", "origin")
SYNC_WORKING_DIRECTORY = os.getenv("SYNC_WORKING_DIRECTORY")
