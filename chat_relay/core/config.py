# Backend Configuration
import os
from pathlib import Path

# Paths
# BASE_DIR = chat_relay (where this config file's parent is)
BASE_DIR = Path(__file__).resolve().parent.parent
PROJECT_ROOT = BASE_DIR.parent
FRONTEND_DIR = Path(os.getenv("FRONTEND_DIR", str(PROJECT_ROOT / "frontend")))

# Gemini API - key from https://aistudio.google.com/app/apikey
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-1.5-flash-latest")
GEMINI_API_BASE = os.getenv("GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta")
GEMINI_TIMEOUT = float(os.getenv("GEMINI_TIMEOUT", "60"))  # seconds

# Optional generation settings, only sent when set; parsed by GeminiClient.from_config
GEMINI_TEMPERATURE = os.getenv("GEMINI_TEMPERATURE")
GEMINI_MAX_OUTPUT_TOKENS = os.getenv("GEMINI_MAX_OUTPUT_TOKENS")

# Prompts used when a file is uploaded without any text
DEFAULT_FILE_PROMPT = "Explain the information contained in this file."
DEFAULT_PROMPTS = {
    "image": "Describe this image.",
    "document": "Summarize this document.",
    "audio": "Transcribe this audio and summarize it.",
}

# Uploads - inline data requests to Gemini are capped at 20 MB
MAX_UPLOAD_MB = int(os.getenv("MAX_UPLOAD_MB", "20"))

# Server Configuration
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 3000))
DEBUG = os.getenv("DEBUG", "False").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
