"""
Origami Cipher — Trace Messages
Each template renders one line of the process telemetry log.
"""

# ═══════════════════════════════════════════════════
# FOLD STEPS
# ═══════════════════════════════════════════════════

TRACE_FOLD_START = "INITIATING {axis} FOLD [POS:{pivot}] [KEEP:{keep}]"

TRACE_MATRIX_STATE = "MATRIX STATE: {snapshot}"

# ═══════════════════════════════════════════════════
# COMPLETION
# ═══════════════════════════════════════════════════

TRACE_COMPLETE = ">> ENCRYPTION COMPLETE: {result}"


def fold_start_line(axis: str, pivot: int, keep: str) -> str:
    return TRACE_FOLD_START.format(axis=axis.upper(), pivot=pivot, keep=keep.upper())


def matrix_state_line(snapshot: str) -> str:
    return TRACE_MATRIX_STATE.format(snapshot=snapshot)


def complete_line(result: str) -> str:
    return TRACE_COMPLETE.format(result=result)
