# interface/plotting/plot_de.py

import numpy as np
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
from plotly.graph_objects import Figure

from de_pipeline.reshaping import venn_regions
from de_pipeline.types import PACKAGES

ABOVE = "Above"
BELOW = "Below"

VENN_COLORS = px.colors.qualitative.Set2

# circle centres, per-region label positions and set label positions (radius 1)
VENN_LAYOUTS = {
    2: {
        "centres": [(-0.5, 0.0), (0.5, 0.0)],
        "regions": {
            (True, False): (-0.9, 0.0),
            (False, True): (0.9, 0.0),
            (True, True): (0.0, 0.0),
        },
        "labels": [(-0.9, 1.2), (0.9, 1.2)],
    },
    3: {
        "centres": [(-0.5, 0.35), (0.5, 0.35), (0.0, -0.5)],
        "regions": {
            (True, False, False): (-1.0, 0.7),
            (False, True, False): (1.0, 0.7),
            (False, False, True): (0.0, -1.1),
            (True, True, False): (0.0, 0.85),
            (True, False, True): (-0.75, -0.35),
            (False, True, True): (0.75, -0.35),
            (True, True, True): (0.0, 0.05),
        },
        "labels": [(-1.2, 1.55), (1.2, 1.55), (0.0, -1.75)],
    },
}


def theme_plot(volcano_data: pd.DataFrame, threshold: float = 1e-100) -> Figure:
    """Faceted volcano plot, one panel per package.

    Points are coloured by whether their adjusted p-value falls below
    ``threshold`` (i.e. whether -log10(padj) rises above it).
    """
    df = _prepare_volcano(volcano_data, threshold)
    legend_title = f"adjusted P value ({threshold:g})"

    fig = px.scatter(
        df,
        x="logFC",
        y="neg_log10_padj",
        color=legend_title,
        facet_col="package",
        opacity=0.7,
        color_discrete_map={ABOVE: "cornflowerblue", BELOW: "darkblue"},
        category_orders={"package": _package_order(df), legend_title: [ABOVE, BELOW]},
        labels={"logFC": "log₂ Fold Change", "neg_log10_padj": "-log₁₀ Adjusted P Value"},
        title="Volcano Plot Comparison of 3 Differential Expression Packages",
    )

    fig.update_layout(
        plot_bgcolor="white",
        paper_bgcolor="white",
        title_font_color="black",
        margin=dict(t=60, b=40),
    )
    grid = dict(showgrid=True, gridcolor="gray", griddash="dash", zeroline=False)
    minor = dict(showgrid=True, gridcolor="lightgray", griddash="dash")
    fig.update_xaxes(**grid, minor=minor)
    fig.update_yaxes(**grid, minor=minor)
    fig.add_hline(y=0, line_dash="dash", line_color="black")
    fig.for_each_annotation(
        lambda a: a.update(text=a.text.split("=")[-1], bgcolor="lightblue", font=dict(color="white"))
    )
    return fig


def build_pval_histogram(pvals: pd.DataFrame, nbins: int = 50) -> Figure:
    df = pvals.dropna(subset=["pval"])

    fig = px.histogram(
        df,
        x="pval",
        color="package",
        facet_col="package",
        nbins=nbins,
        category_orders={"package": _package_order(df)},
        labels={"pval": "p-value"},
        title="Raw p-value distribution per package",
    )
    fig.update_layout(showlegend=False, bargap=0.05, margin=dict(t=60, b=40))
    fig.update_xaxes(range=[0, 1], tickangle=0)
    fig.for_each_annotation(lambda a: a.update(text=a.text.split("=")[-1]))
    return fig


def build_venn_diagram(sets: dict[str, set], title: str = "Genes reported by each package") -> Figure:
    """Draw a 2- or 3-set Venn diagram with region counts.

    Circles have equal radius whatever the set sizes, and the region label
    positions in ``VENN_LAYOUTS`` are fixed for that geometry.
    """
    labels = list(sets)
    layout = VENN_LAYOUTS.get(len(labels))
    if layout is None:
        raise ValueError(f"Venn diagrams need 2 or 3 sets, got {len(labels)}")

    fig = go.Figure()
    for i, (cx, cy) in enumerate(layout["centres"]):
        color = VENN_COLORS[i % len(VENN_COLORS)]
        fig.add_shape(
            type="circle",
            x0=cx - 1, y0=cy - 1, x1=cx + 1, y1=cy + 1,
            fillcolor=color, opacity=0.35, line=dict(color=color, width=2),
        )

    regions = venn_regions(sets)
    for key, (x, y) in layout["regions"].items():
        members = tuple(label for label, inside in zip(labels, key) if inside)
        fig.add_annotation(x=x, y=y, text=str(regions[members]), showarrow=False, font=dict(size=16))

    for label, (x, y) in zip(labels, layout["labels"]):
        fig.add_annotation(
            x=x, y=y, text=f"<b>{label}</b> ({len(sets[label])})", showarrow=False, font=dict(size=14)
        )

    fig.update_xaxes(visible=False, range=[-2.2, 2.2])
    fig.update_yaxes(visible=False, range=[-2.2, 2.2], scaleanchor="x", scaleratio=1)
    fig.update_layout(title=title, plot_bgcolor="white", height=500, margin=dict(t=60, b=20))
    return fig


# --- Helpers ---

def _prepare_volcano(volcano_data: pd.DataFrame, threshold: float) -> pd.DataFrame:
    df = volcano_data.dropna(subset=["logFC", "padj"]).copy()
    # padj of exactly 0 would plot at infinity
    padj = df["padj"].clip(lower=np.finfo(float).tiny)
    df["neg_log10_padj"] = -np.log10(padj)
    df[f"adjusted P value ({threshold:g})"] = np.where(df["padj"] < threshold, ABOVE, BELOW)
    return df


def _package_order(df: pd.DataFrame) -> list[str]:
    present = set(df["package"].unique())
    return [p for p in PACKAGES if p in present] + sorted(present - set(PACKAGES))
