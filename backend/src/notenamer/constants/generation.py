"""Title and tag generation parameters.

TOP_K and TOP_P are pinned to their most deterministic setting for both
tasks; temperature and output-token ceilings come from settings.
"""

# =============================================================================
# Sampling
# =============================================================================

TOP_K = 1
TOP_P = 1.0

# =============================================================================
# Titles
# =============================================================================
# Characters that common filesystems reserve in file names. Each is replaced
# by a space before whitespace is collapsed.

RESERVED_TITLE_CHARS = '/\\:*?"<>|'

NOTE_EXTENSION = ".md"

# =============================================================================
# Settings Form
# =============================================================================
# Credential format feedback in the settings form is debounced so it does not
# flicker while the user types.

VALIDATION_DEBOUNCE_SECONDS = 0.3
