"""
PDF report of a stepping session, one page per history entry.
"""

import logging
from pathlib import Path
from typing import Union

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages

from .data_models import SimplexState
from .utils import original_form_lines, original_form_matrices, tableau_to_text

logger = logging.getLogger(__name__)


def export_history_pdf(state: SimplexState, output_path: Union[str, Path]) -> int:
    """
    Write every history entry of ``state`` to a PDF.

    Each page shows the problem in its entered form and the tableau at
    that step.

    Args:
        state: Session whose history is exported
        output_path: Destination PDF

    Returns:
        Number of pages written
    """
    total = len(state.history)
    if total == 0:
        logger.warning("History is empty, no report written")
        return 0

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with PdfPages(output_path) as pdf:
        for idx, entry in enumerate(state.history):
            fig = plt.figure(figsize=(11.69, 8.27))  # A4 landscape
            ax_txt = fig.add_subplot(1, 1, 1)
            ax_txt.axis("off")

            header = f"Step {entry.step_number} ({idx + 1}/{total})"
            if entry.pivot_row is not None:
                header += f" | pivot ({entry.pivot_row}, {entry.pivot_col})"
            if idx == state.current_step:
                header += " | current"

            blocks = [header, "", "PROBLEM"]
            blocks += original_form_lines(entry.lp)
            blocks += [""] + original_form_matrices(entry.lp)
            blocks += ["", "TABLEAU", tableau_to_text(entry.lp)]

            ax_txt.text(
                0.0,
                1.0,
                "\n".join(blocks),
                va="top",
                ha="left",
                family="monospace",
                fontsize=9,
            )
            fig.suptitle("Jordan Exchange History", fontsize=12, fontweight="bold")
            pdf.savefig(fig, bbox_inches="tight")
            plt.close(fig)

    logger.info(f"Wrote {total} page(s) to {output_path}")
    return total
