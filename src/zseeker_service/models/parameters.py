"""
Pydantic model for ZSeeker scoring parameters.

The ParameterSet holds every value that ends up on the ZSeeker command
line. It is built once per request by the parameter resolver and never
mutated afterwards.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# Reward/penalty curve for runs of consecutive AT dinucleotides, indexed by
# position in the run. The last two entries strongly penalise long AT runs.
DEFAULT_CONSECUTIVE_AT_SCORING: tuple[float, ...] = (
    0.5,
    0.5,
    0.5,
    0.5,
    0.0,
    0.0,
    -5.0,
    -100.0,
)

# Form field name -> ParameterSet field name. Form names follow the
# ZSeeker command-line flags.
FORM_FIELD_NAMES: dict[str, str] = {
    "GC_weight": "gc_weight",
    "AT_weight": "at_weight",
    "GT_weight": "gt_weight",
    "AC_weight": "ac_weight",
    "mismatch_penalty_starting_value": "mismatch_penalty_starting_value",
    "mismatch_penalty_linear_delta": "mismatch_penalty_linear_delta",
    "mismatch_penalty_type": "mismatch_penalty_type",
    "method": "method",
    "cadence_reward": "cadence_reward",
    "n_jobs": "n_jobs",
    "threshold": "threshold",
    "consecutive_AT_scoring": "consecutive_at_scoring",
}


class ParameterSet(BaseModel):
    """
    Validated scoring parameters for one ZSeeker run.

    Dinucleotide weights score each step of a candidate Z-DNA stretch;
    mismatch penalties escalate as non-alternating steps accumulate.
    Weights carry no range restriction beyond being finite. Integer
    fields are not bounded either; the tool decides what it accepts.

    Attributes:
        gc_weight: Score for GC/CG transitions.
        at_weight: Score for AT/TA transitions.
        gt_weight: Score for GT/TG transitions.
        ac_weight: Score for AC/CA transitions.
        mismatch_penalty_starting_value: Penalty for the first mismatch.
        mismatch_penalty_linear_delta: Increment applied per further mismatch.
        mismatch_penalty_type: Penalty escalation mode (e.g. "linear").
        method: Scoring method passed to the tool (e.g. "transitions").
        cadence_reward: Reward for the cadence scoring method (accepted but
            not passed to the tool).
        n_jobs: Worker processes requested from the tool.
        threshold: Minimum score for a region to be reported.
        consecutive_at_scoring: Position-indexed score curve for AT runs.
    """

    gc_weight: float = 7.0
    at_weight: float = 0.5
    gt_weight: float = 1.0
    ac_weight: float = 1.0
    mismatch_penalty_starting_value: int = 1
    mismatch_penalty_linear_delta: int = 2
    mismatch_penalty_type: str = Field(default="linear", min_length=1)
    method: str = Field(default="transitions", min_length=1)
    cadence_reward: float = 1.0
    n_jobs: int = 8
    threshold: int = 50
    consecutive_at_scoring: tuple[float, ...] = Field(
        default=DEFAULT_CONSECUTIVE_AT_SCORING,
        min_length=1,
        description="Never empty; resolver substitutes the default curve.",
    )

    model_config = {"frozen": True, "allow_inf_nan": False}
