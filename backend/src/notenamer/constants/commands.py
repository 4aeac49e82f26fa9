"""Command identifiers exposed to the host application."""

COMMAND_GENERATE_TITLE = "notenamer-generate-title"
COMMAND_GENERATE_TAGS = "notenamer-generate-tags"
