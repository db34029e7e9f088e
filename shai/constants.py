"""Constants used throughout the shai package."""

from colorama import Fore, Style

# Package information
PACKAGE_NAME = "shai"
CONFIG_FILE_NAME = "config.json"

# ANSI Color Codes (using colorama)
CLR_RESET = Style.RESET_ALL
CLR_RED = Fore.RED
CLR_BOLD_RED = Style.BRIGHT + Fore.RED
CLR_GREEN = Fore.GREEN
CLR_BOLD_GREEN = Style.BRIGHT + Fore.GREEN
CLR_YELLOW = Fore.YELLOW
CLR_BOLD_YELLOW = Style.BRIGHT + Fore.YELLOW
CLR_MAGENTA = Fore.MAGENTA
CLR_BOLD_MAGENTA = Style.BRIGHT + Fore.MAGENTA
CLR_CYAN = Fore.CYAN
CLR_BOLD_CYAN = Style.BRIGHT + Fore.CYAN
CLR_WHITE = Fore.WHITE
CLR_BOLD_WHITE = Style.BRIGHT + Fore.WHITE

# Default configuration values
DEFAULT_OLLAMA_URL = "http://localhost:11434/api/chat"
DEFAULT_OLLAMA_MODEL = "llama3"
DEFAULT_REQUEST_TIMEOUT = 300  # seconds; local inference can be slow
DEFAULT_KEEP_ALIVE = "5m"
DEFAULT_ENABLE_DEBUG = False

# Environment fallbacks
DEFAULT_POSIX_SHELL = "/bin/bash"
UNKNOWN_WORKING_DIRECTORY = "UNKNOWN"

# Seed message that opens every conversation
START_MESSAGE = "START"

# Confirmation gate tokens
REJECT_TOKEN = "n"
QUIT_TOKENS = ("q", "quit")

# Process exit codes
EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130
