"""
Visualization of cumulative carbon sequestration after liana cutting.
"""
from pathlib import Path
from typing import Optional, Union, TYPE_CHECKING

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns

from .logging_config import get_logger
from .simulation import CONTROL_LABEL, LIBERATED_LABEL

if TYPE_CHECKING:
    from .simulation import SimulationResult

ADDITIONAL_LABEL = 'Additional Carbon'
LOST_LABEL = 'Lost Carbon'

FIGURE_SIZE = (10.6, 7.5)
FONT_SIZE = 20

logger = get_logger(__name__)


def additionality_frame(carbon_table: pd.DataFrame, trees_per_ha: int) -> pd.DataFrame:
    """Area between the liberated and control curves, per hectare.

    Args:
        carbon_table: Per-tree carbon table from the simulation
        trees_per_ha: Number of liberated trees per hectare

    Returns:
        DataFrame with ``yr``, ``treated_CO2e``, ``control_CO2e``, ``ymax``,
        ``ymin`` and ``fill``, restricted to years where liberated trees
        hold more carbon than the control.
    """
    df = carbon_table[['yr', 'treated_CO2e', 'control_CO2e']].copy()
    df['treated_CO2e'] = df['treated_CO2e'] * trees_per_ha
    df['control_CO2e'] = df['control_CO2e'] * trees_per_ha
    df['ymax'] = np.maximum(df['treated_CO2e'], df['control_CO2e'])
    df['ymin'] = np.minimum(df['treated_CO2e'], df['control_CO2e'])
    df['fill'] = np.where(df['treated_CO2e'] > df['control_CO2e'], ADDITIONAL_LABEL, LOST_LABEL)
    return df[df['fill'] == ADDITIONAL_LABEL].reset_index(drop=True)


def plot_sequestration(result: 'SimulationResult',
                       save_path: Optional[Union[str, Path]] = None,
                       show_fill: bool = False,
                       dpi: int = 600):
    """Plot cumulative CO2e per hectare for liberated and control trees.

    The gap at the final year is marked with a double-headed arrow and
    labelled with the additional carbon sequestered per hectare.

    Args:
        result: Simulation result
        save_path: Optional path to save the figure
        show_fill: Shade the area between the two curves
        dpi: Resolution used when saving

    Returns:
        The matplotlib Figure
    """
    long = result.per_hectare_table()
    final = result.final_per_hectare()
    final_year = result.final_year

    with sns.axes_style('ticks'):
        fig, ax = plt.subplots(figsize=FIGURE_SIZE)

    if show_fill:
        fill = additionality_frame(result.carbon_table, result.parameters.trees_per_ha)
        ax.fill_between(fill['yr'], fill['ymin'], fill['ymax'],
                        color='chartreuse', linewidth=0, label='_nolegend_')

    linestyles = {LIBERATED_LABEL: (0, (8, 4)), CONTROL_LABEL: 'solid'}
    for label in (LIBERATED_LABEL, CONTROL_LABEL):
        series = long[long['tree_type'] == label]
        ax.plot(series['yr'], series['value'], color='black',
                linestyle=linestyles[label], linewidth=2.4, label=label)

    # Final-year values and the gap between them
    ax.scatter([final_year, final_year], [final[LIBERATED_LABEL], final[CONTROL_LABEL]],
               s=40, color='black', zorder=3, clip_on=False)
    ax.annotate('', xy=(final_year, final[CONTROL_LABEL]),
                xytext=(final_year, final[LIBERATED_LABEL]),
                arrowprops=dict(arrowstyle='<|-|>', color='grey', lw=2,
                                shrinkA=4, shrinkB=4))

    gap = final[LIBERATED_LABEL] - final[CONTROL_LABEL]
    mid = (final[LIBERATED_LABEL] + final[CONTROL_LABEL]) / 2
    text_x = final_year + max(final_year / 6.0, 1.0)
    ax.text(text_x, mid,
            f"Additional carbon\nsequestered\nby year {final_year} =",
            fontsize=FONT_SIZE - 2, fontstyle='italic', ha='center', va='bottom',
            clip_on=False)
    ax.text(text_x, mid,
            rf"{gap:.1f} MgCO$_2$ha$^{{-1}}$",
            fontsize=FONT_SIZE - 2, ha='center', va='top', clip_on=False)

    ax.set_xlabel('Years After Liana Cutting', fontsize=FONT_SIZE, fontweight='bold')
    ax.set_ylabel(r'Cumulative Carbon Sequestered (MgCO$_2$ha$^{-1}$)',
                  fontsize=FONT_SIZE, fontweight='bold')
    ax.tick_params(labelsize=FONT_SIZE)
    ax.xaxis.set_major_locator(plt.MaxNLocator(10, integer=True))
    ax.yaxis.set_major_locator(plt.MaxNLocator(5))
    ax.grid(False)
    for side in ('left', 'bottom'):
        ax.spines[side].set_linewidth(1.5)
    sns.despine(ax=ax)

    legend = ax.legend(loc='center', bbox_to_anchor=(0.3, 0.8), frameon=False,
                       fontsize=FONT_SIZE, handlelength=3.5, labelspacing=0.8)
    for text in legend.get_texts():
        text.set_fontweight('bold')

    # Room on the right for the annotation
    fig.subplots_adjust(right=0.72)

    if save_path:
        save_path = Path(save_path)
        save_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(save_path, dpi=dpi, facecolor='white')
        logger.info(f"Saved sequestration figure to {save_path}")
        plt.close(fig)

    return fig
