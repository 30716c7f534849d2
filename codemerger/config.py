"""Runtime configuration, read once from the environment."""

import os

# -------------------------------------------------------
# Server
# -------------------------------------------------------
HOST = os.getenv("CODEMERGER_HOST", "127.0.0.1")
PORT = int(os.getenv("CODEMERGER_PORT", "5000"))
DEBUG = os.getenv("CODEMERGER_DEBUG", "").strip().lower() in ("1", "true", "yes", "on")
MAX_UPLOAD_BYTES = int(os.getenv("CODEMERGER_MAX_UPLOAD_BYTES", str(64 * 1024 * 1024)))  # 64 MiB
# Uncompressed size cap for a single archive member.
MAX_ENTRY_BYTES = int(os.getenv("CODEMERGER_MAX_ENTRY_BYTES", str(10 * 1024 * 1024)))  # 10 MiB

# -------------------------------------------------------
# Decoding
# -------------------------------------------------------
TEXT_ENCODING = os.getenv("CODEMERGER_ENCODING", "utf-8")

# -------------------------------------------------------
# Archives
# -------------------------------------------------------
ARCHIVE_EXTENSION = ".zip"
ARCHIVE_MIME_TYPES = ("application/zip", "application/x-zip-compressed")

# Path segments that mark OS bookkeeping entries inside archives.
JUNK_SEGMENTS = ("__MACOSX", ".DS_Store")

# -------------------------------------------------------
# Placeholder content for files that could not be read
# -------------------------------------------------------
ENTRY_READ_FAILED = "[Error reading file content inside zip]"
ENTRY_TOO_LARGE = "[Error: File inside zip is too large to read]"
ARCHIVE_OPEN_FAILED = "[Error: Failed to unzip file]"
FILE_READ_FAILED = "[Error reading file]"

# -------------------------------------------------------
# Merged document
# -------------------------------------------------------
PLACEHOLDER_TOKEN = "{fileName}"
_RULE = "=" * 80
DEFAULT_TEMPLATE = os.getenv(
    "CODEMERGER_TEMPLATE", f"{_RULE}\nFile: {PLACEHOLDER_TOKEN}\n{_RULE}"
)
