"""
Visualization Module for the US Rent & Income Report

Generates the report artifacts:
1. Bar chart of the highest median incomes
2. Bar chart of the highest median rents
3. Interactive Folium map of income by state
"""

import pandas as pd
import numpy as np
import matplotlib
import matplotlib.pyplot as plt
import matplotlib.ticker as mticker
from matplotlib import colors as mcolors
import seaborn as sns
import folium
import branca
from pathlib import Path
import logging

from .data_processing import STATES_GEOJSON_PATH, rank_observations

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Setup
plt.style.use('seaborn-v0_8-whitegrid')
sns.set_palette('husl')
plt.rcParams['figure.figsize'] = (12, 6)
plt.rcParams['font.size'] = 11

# Continental US center
US_CENTER = [39.8, -98.6]

TOP_N = 10
LABEL_WIDTH = 12

# Blues without its lightest third
BAR_CMAP = mcolors.LinearSegmentedColormap.from_list(
    'estimate_blues', matplotlib.colormaps['Blues'](np.linspace(0.35, 1.0, 256))
)

MAP_COLORS = ['#ffffcc', '#a1dab4', '#41b6c4', '#2c7fb8', '#253494']


def truncate_label(name: str, width: int = LABEL_WIDTH) -> str:
    """Shorten a region name for the category axis."""
    return str(name)[:width].rstrip()


def format_dollars(value: float) -> str:
    if pd.isna(value):
        return 'N/A'
    return f"${value:,.0f}"


def create_estimate_bar_chart(df: pd.DataFrame, output_path: Path, title: str,
                              n: int = TOP_N, direction: str = 'max',
                              ylabel: str = 'Estimate') -> Path:
    """
    Bar chart of the top (or bottom) n regions by estimate.
    Bar color = estimate magnitude, error bars = margin of error.
    """
    logger.info(f"Creating bar chart: {title}")

    top = rank_observations(df, n, direction=direction).dropna(subset=['estimate'])

    fig, ax = plt.subplots()

    if top.empty:
        logger.warning(f"No estimates to plot for '{title}', saving an empty chart")
        ax.text(0.5, 0.5, 'No data', ha='center', va='center', transform=ax.transAxes)
        ax.set_xticks([])
    else:
        estimates = top['estimate'].to_numpy()
        norm = mcolors.Normalize(vmin=estimates.min(), vmax=estimates.max())
        positions = np.arange(len(top))

        ax.bar(
            positions,
            estimates,
            color=BAR_CMAP(norm(estimates)),
            yerr=top['margin'].fillna(0).to_numpy(),
            capsize=3,
            ecolor='#555555'
        )
        ax.set_xticks(positions)
        ax.set_xticklabels([truncate_label(r) for r in top['region']], rotation=45, ha='right')

        for x, v in zip(positions, estimates):
            ax.text(x, v, format_dollars(v), ha='center', va='bottom', fontsize=9)

        if norm.vmax > norm.vmin:
            sm = plt.cm.ScalarMappable(norm=norm, cmap=BAR_CMAP)
            sm.set_array([])
            cbar = fig.colorbar(sm, ax=ax)
            cbar.ax.yaxis.set_major_formatter(mticker.StrMethodFormatter('${x:,.0f}'))

    ax.yaxis.set_major_formatter(mticker.StrMethodFormatter('${x:,.0f}'))
    ax.set_ylabel(ylabel)
    ax.set_title(title)
    sns.despine(ax=ax)

    fig.tight_layout()
    fig.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)

    logger.info(f"Saved bar chart to {output_path}")
    return Path(output_path)


def create_income_map(df: pd.DataFrame, output_path: Path, geo_path: Path = None,
                      value_col: str = 'estimate') -> folium.Map:
    """
    Create an interactive map of estimates by region.
    States shaded by estimate when a boundaries GeoJSON is given,
    circle color = estimate, hover = region and dollar estimate.
    """
    logger.info("Creating income map")

    m = folium.Map(location=US_CENTER, zoom_start=4, tiles='CartoDB positron')

    data = df.dropna(subset=[value_col, 'latitude', 'longitude'])

    if data.empty:
        logger.warning("No regions to map, saving an empty map")
    else:
        vmin = data[value_col].min()
        vmax = data[value_col].max()
        if vmax == vmin:
            vmax = vmin + 1

        colormap = branca.colormap.LinearColormap(
            MAP_COLORS,
            vmin=vmin,
            vmax=vmax,
            caption='Median Yearly Income ($)'
        )

        fg_regions = folium.FeatureGroup(name='Regions', show=True)
        for _, row in data.iterrows():
            estimate = row[value_col]
            popup_html = f"""
                <strong>{row['region']}</strong><br>
                <b>Estimate:</b> {format_dollars(estimate)}<br>
                <b>Margin of error:</b> {format_dollars(row.get('margin'))}
            """

            folium.CircleMarker(
                location=[row['latitude'], row['longitude']],
                radius=8,
                color=colormap(estimate),
                fill=True,
                fill_color=colormap(estimate),
                fill_opacity=0.8,
                tooltip=f"{row['region']}: {format_dollars(estimate)}",
                popup=folium.Popup(popup_html, max_width=250)
            ).add_to(fg_regions)
        fg_regions.add_to(m)
        colormap.add_to(m)

        if geo_path and Path(geo_path).exists():
            folium.Choropleth(
                geo_data=str(geo_path),
                name='Income by State',
                data=data,
                columns=['region', value_col],
                key_on='feature.properties.name',
                fill_color='YlGnBu',
                fill_opacity=0.6,
                line_opacity=0.2,
                nan_fill_color='white',
                legend_name='Median Yearly Income ($)'
            ).add_to(m)

            folium.LayerControl(collapsed=False).add_to(m)
        elif geo_path:
            logger.warning(f"State boundaries not found at {geo_path}, skipping choropleth")

    m.save(str(output_path))
    logger.info(f"Saved income map to {output_path}")
    return m


def generate_all_charts(report, output_dir: Path,
                        geo_path: Path = STATES_GEOJSON_PATH) -> dict:
    """Render both bar charts and the income map from a pipeline report."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    outputs = {
        'top_income': output_dir / 'top_income.png',
        'top_rent': output_dir / 'top_rent.png',
        'income_map': output_dir / 'income_map.html',
    }

    create_estimate_bar_chart(
        report.income, outputs['top_income'],
        title=f'Top {TOP_N} States by Median Yearly Income',
        ylabel='Median Yearly Income'
    )
    create_estimate_bar_chart(
        report.rent, outputs['top_rent'],
        title=f'Top {TOP_N} States by Median Monthly Rent',
        ylabel='Median Monthly Rent'
    )
    create_income_map(report.income_by_region, outputs['income_map'], geo_path=geo_path)

    logger.info("All charts generated successfully!")
    return outputs


if __name__ == '__main__':
    from .data_processing import run_pipeline

    generate_all_charts(run_pipeline(), Path.cwd() / 'outputs')
