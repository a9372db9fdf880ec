"""Training configuration for decision trees."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

type ContinuousWeighting = Literal["median", "counted"]


class TreeConfig(BaseModel):
    """Tunable knobs for tree induction.

    Attributes:
        continuous_weighting (ContinuousWeighting): How the two branches of a
            continuous median split are weighted when computing information
            gain. `"median"` derives the weights analytically from the
            median's rank, which is exact for distinct values and an
            approximation when the column holds ties. `"counted"` uses the
            observed number of rows on each side.
        random_state (int | None): Seed for the shuffle that precedes median
            selection. `None` means non-deterministic. The selected median does
            not depend on the seed; only the selection's running time does.

    Examples:
        >>> TreeConfig().continuous_weighting
        'median'
        >>> TreeConfig(continuous_weighting="counted", random_state=7).random_state
        7
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    continuous_weighting: ContinuousWeighting = Field(
        default="median",
        description=(
            "Branch weighting for continuous information gain: 'median' (analytic, from the median's rank) "
            "or 'counted' (observed branch sizes)."
        ),
    )
    random_state: int | None = Field(
        default=None,
        description="Seed for the shuffle that precedes median selection. None means non-deterministic.",
    )


DEFAULT_CONFIG: TreeConfig = TreeConfig()
