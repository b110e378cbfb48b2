"""Centralised tunables and magic numbers.

All numeric constants that control runtime behaviour are collected here
so they are easy to find, document, and adjust.
"""

# ---------------------------------------------------------------------------
# Runner  (src/core/runner.py)
# ---------------------------------------------------------------------------
DEFAULT_TIMEOUT_MS = 30_000   # whole-script budget
RC_VAR             = "RC"     # return code of the last ADDRESS directive
RESULT_VAR         = "RESULT" # payload of the last ADDRESS directive
SLIDES_ADDRESS     = "SLIDES"

# ---------------------------------------------------------------------------
# Store  (src/core/slide_store.py)
# ---------------------------------------------------------------------------
SLIDE_ID_PREFIX  = "o-impress-"
SLIDE_SPACING_X  = 900    # default x offset between consecutive slides
COPY_SUFFIX      = " (copy)"

# ---------------------------------------------------------------------------
# Error codes  (stable: scripts branch on RC)
# ---------------------------------------------------------------------------
OK                        = 0
ERR_HANDLER_MISSING       = 1
ERR_UNKNOWN               = 2     # unknown address or command
ERR_NEW_SLIDE             = 11
ERR_TITLE_MISSING         = 12
ERR_TITLE_INDEX           = 13
ERR_TITLE_FAILED          = 14
ERR_TEXT_MISSING          = 21
ERR_TEXT_INDEX            = 22
ERR_TEXT_FAILED           = 23
ERR_LIST_FAILED           = 31
ERR_CURRENT_FAILED        = 32
ERR_GOTO_MISSING          = 41
ERR_GOTO_INDEX            = 42
ERR_GOTO_FAILED           = 43
ERR_DELETE_PROTECTED      = 51
ERR_DELETE_INDEX          = 52
ERR_DELETE_FAILED         = 53
ERR_DUPLICATE_MISSING     = 61
ERR_DUPLICATE_INDEX       = 62
ERR_DUPLICATE_FAILED      = 63
ERR_NOTHING_TO_UNDO       = 71
ERR_UNDO_FAILED           = 72
ERR_NOTHING_TO_REDO       = 81
ERR_REDO_FAILED           = 82
ERR_GET_SLIDES_FAILED     = 91
ERR_INFO_INDEX            = 92
ERR_INFO_FAILED           = 93
ERR_RUN_FAILED            = 99    # uncaught exception or timeout
