import os
from dotenv import load_dotenv

# Load .env from project root
load_dotenv()

LLM_BASE_URL = os.getenv("LLM_BASE_URL", "http://localhost:11434/v1")
LLM_MODEL = os.getenv("LLM_MODEL", "gpt-4")
LLM_API_KEY = os.getenv("LLM_API_KEY", "")
LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.3"))
LLM_MAX_TOKENS = int(os.getenv("LLM_MAX_TOKENS", "4000"))
LLM_TIMEOUT = int(os.getenv("LLM_TIMEOUT", "300"))

PROJECTS_DIR = os.getenv("PROJECTS_DIR", "./projects")
DIAGRAM_STORE = os.getenv("DIAGRAM_STORE", "file")  # file | sql
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./archdocs.db")

DIAGRAM_FORMAT = os.getenv("DIAGRAM_FORMAT", "mermaid")  # mermaid | d2

FALLBACK_SYSTEM_NAME = os.getenv("FALLBACK_SYSTEM_NAME", "System")
FALLBACK_SYSTEM_DESCRIPTION = os.getenv(
    "FALLBACK_SYSTEM_DESCRIPTION", "Main system based on requirements"
)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
