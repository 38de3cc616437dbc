from dotenv import load_dotenv
import os

# .env 파일 로드
load_dotenv()

# --- Generation endpoint ---
LLM_API_KEY = os.getenv("LLM_API_KEY")
LLM_API_BASE_URL = os.getenv("LLM_API_BASE_URL", "https://ai.gateway.lovable.dev/v1")
PLAN_MODEL = os.getenv("PLAN_MODEL", "google/gemini-2.5-flash")
IMAGE_MODEL = os.getenv("IMAGE_MODEL", "google/gemini-2.5-flash-image")

# --- Speech synthesis ---
TTS_ENDPOINT = os.getenv("TTS_ENDPOINT")
TTS_SUBSCRIPTION_KEY = os.getenv("TTS_SUBSCRIPTION_KEY")
TTS_VOICE = os.getenv("TTS_VOICE", "en-US-JennyNeural")

# --- Client side ---
FITCOACH_API_URL = os.getenv("FITCOACH_API_URL", "http://127.0.0.1:8000")
FITCOACH_STATE_DIR = os.getenv("FITCOACH_STATE_DIR", os.path.join(os.path.expanduser("~"), ".fitcoach"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
