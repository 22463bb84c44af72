# filtervalues/services/rendering.py
import logging
import math
from typing import Dict, List, Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from matplotlib.figure import Figure
from matplotlib.patches import Patch

from filtervalues.exceptions import InvalidParameterError

logger = logging.getLogger(__name__)


def facet_grid(
    n_panels: int, nrow: Optional[int] = None, ncol: Optional[int] = None
) -> Tuple[int, int]:
    """Rows and columns of the facet layout; missing dimensions are derived."""
    n_panels = max(n_panels, 1)
    if nrow is None and ncol is None:
        ncol = math.ceil(math.sqrt(n_panels))
    if nrow is None:
        nrow = math.ceil(n_panels / ncol)
    elif ncol is None:
        ncol = math.ceil(n_panels / nrow)
    if nrow < 1 or ncol < 1 or nrow * ncol < n_panels:
        raise InvalidParameterError(
            f"Facet layout {nrow}x{ncol} cannot hold {n_panels} panels."
        )
    return nrow, ncol


def _type_colors(types: List[str]) -> Dict[str, tuple]:
    cmap = plt.get_cmap("tab10")
    return {t: cmap(i % cmap.N) for i, t in enumerate(types)}


def draw_report(report, figsize: Optional[Tuple[float, float]] = None) -> Figure:
    """
    Draws a filter report as a bar chart.

    Bars are drawn in row order, which is the ranking order of the report.
    Faceted reports get one panel per method with its own y scale.
    """
    data: pd.DataFrame = report.data
    if report.facet_by:
        panels = [
            (label, data[data[report.facet_by] == label])
            for label in pd.unique(data[report.facet_by])
        ]
    else:
        panels = [(None, data)]

    nrow, ncol = facet_grid(len(panels), report.facet_nrow, report.facet_ncol)
    fig, axes = plt.subplots(
        nrow,
        ncol,
        figsize=figsize or (max(6.0, 4.0 * ncol), 4.0 * nrow),
        squeeze=False,
    )

    colors = None
    if report.fill_by:
        colors = _type_colors(list(pd.unique(data[report.fill_by].astype(str))))

    flat_axes = axes.flatten()
    for ax, (label, part) in zip(flat_axes, panels):
        names = part["name"].astype(str).tolist()
        heights = np.nan_to_num(part["value"].to_numpy(dtype=float))
        bar_colors = (
            [colors[str(t)] for t in part[report.fill_by]] if colors else None
        )
        positions = np.arange(len(names))
        ax.bar(positions, heights, color=bar_colors)
        ax.set_xticks(positions)
        ax.set_xticklabels(names, rotation=45, ha="right")
        ax.set_xlabel("")
        ax.set_ylabel("")
        if label is not None:
            ax.set_title(str(label))

    for ax in flat_axes[len(panels):]:
        ax.set_visible(False)

    if colors:
        handles = [Patch(color=c, label=t) for t, c in colors.items()]
        fig.legend(handles=handles, title=report.fill_by, loc="upper right")

    fig.suptitle(report.title)
    fig.tight_layout()
    logger.debug(f"Rendered filter report '{report.title}' with {len(panels)} panel(s).")
    return fig
