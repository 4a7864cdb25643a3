"""UI configuration constants.

Centralizes magic numbers and configuration values for the UI module.
"""

# Input history configuration
INPUT_HISTORY_MAX_SIZE = 100  # Maximum entries in input history

# View identifiers used by the content switcher
ENTER_VIEW = "enter-view"
CHAT_VIEW = "chat-view"
