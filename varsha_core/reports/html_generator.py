"""
HTML Report Generator
Human-readable report for one calculation: site summary, key results,
monthly potential table, recommendations and warnings
"""

import html
from pathlib import Path
from typing import List, Optional, Tuple
import logging

import pandas as pd

from varsha_core.config.settings import COLOR_SCHEME, MONTH_NAMES, REPORTS_DIR, MODE_RAINWATER
from varsha_core.models.results import CalculationResult
from varsha_core.models.site import AnySiteInput
from varsha_core.utils.core import DataValidator, get_timestamp

logger = logging.getLogger(__name__)

MODE_TITLES = {
    'rainwater': 'Rainwater Harvesting',
    'recharge': 'Artificial Recharge',
}


def monthly_frame(results: CalculationResult) -> pd.DataFrame:
    """Monthly potential table with each month's share of the annual total"""
    frame = pd.DataFrame({
        'Month': list(MONTH_NAMES),
        'Potential (L)': list(results.monthly_potential),
    })
    total = max(results.rainwater_potential, 1)
    frame['Share (%)'] = (frame['Potential (L)'] / total * 100).round(1)
    return frame


def key_results(site: AnySiteInput, results: CalculationResult, mode: str) -> List[Tuple[str, str]]:
    """(label, value) lines summarising a calculation"""
    if mode == MODE_RAINWATER:
        lines = [
            ('Roof Area', f"{site.roof_area} m² ({site.roof_type})"),
            ('Annual Rainwater Potential', f"{results.rainwater_potential:,} L"),
            ('Household Demand', f"{results.household_demand:,} L"),
            ('Coverage', f"{results.coverage_percentage}%"),
            ('Recommended Tank Capacity', f"{results.tank_capacity:,} L"),
            ('Tank Dimensions', f"{results.tank_dimensions.diameter}m × {results.tank_dimensions.height}m"),
            ('First Flush', f"{results.first_flush:,} L"),
            ('System Cost (Medium)', f"₹{results.system_cost.medium:,}"),
            ('Annual Savings', f"₹{results.annual_savings:,}"),
            ('Payback Period', f"{results.payback_period} years"),
        ]
    else:
        lines = [
            ('Catchment Area', f"{site.catchment_area} m² ({site.catchment_type})"),
            ('Annual Rainwater Potential', f"{results.rainwater_potential:,} L"),
            ('Annual Recharge Volume', f"{results.recharge_volume} m³"),
            ('System Cost (Medium)', f"₹{results.system_cost.medium:,}"),
            ('Groundwater Benefit', f"{results.groundwater_benefit} m³/year"),
            ('Payback Period', f"{results.payback_period} years"),
        ]
        pit = results.pit_dimensions
        if pit is not None:
            lines.append(('Pit Dimensions', f"{pit.length}×{pit.width}×{pit.depth}m"))
        trench = results.trench_dimensions
        if trench is not None:
            lines.append(('Trenches', f"{trench.count} × {trench.length}m ({trench.width}m wide, {trench.depth}m deep)"))
        if site.has_borewell:
            lines.append(('Borewell Recharging', f"Yes ({site.borewell.condition})"))

    lines.append(('Feasibility', f"{results.feasibility_level} ({results.feasibility_score}/100)"))
    return lines


class HtmlReportGenerator:
    """Generate standalone HTML reports for calculation results"""

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self.color_scheme = COLOR_SCHEME

    def generate_report(self,
                        site: AnySiteInput,
                        results: CalculationResult,
                        mode: str,
                        output_folder: Optional[Path] = None) -> Path:
        """
        Write the HTML report to disk

        Args:
            site: input the results were computed from
            results: engine output
            mode: 'rainwater' or 'recharge'
            output_folder: Where to save the report (defaults to REPORTS_DIR)

        Returns:
            Path to generated HTML file
        """
        if output_folder is None:
            output_folder = REPORTS_DIR

        output_folder = Path(output_folder)
        output_folder.mkdir(parents=True, exist_ok=True)

        html_content = self.render(site, results, mode)

        sanitized_name = DataValidator.sanitize_filename(site.name) or 'site'
        output_file = output_folder / f"{mode}-analysis-report-{sanitized_name}.html"

        with open(output_file, 'w', encoding='utf-8') as f:
            f.write(html_content)

        logger.info(f"Report generated: {output_file}")

        return output_file

    def render(self, site: AnySiteInput, results: CalculationResult, mode: str,
               generated_on: Optional[str] = None) -> str:
        """Complete HTML document for one calculation"""
        level_color = self.color_scheme.get(results.feasibility_level, self.color_scheme['neutral'])
        title = MODE_TITLES.get(mode, mode)
        generated_on = generated_on or get_timestamp()

        table_html = monthly_frame(results).to_html(index=False, classes='data-table', border=0)

        return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>RTRWH/AR Analysis Report - {title}</title>
    <style>
        body {{
            font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif;
            background: #eef3f8;
            color: #333;
            line-height: 1.6;
            padding: 20px;
        }}

        .container {{
            max-width: 1000px;
            margin: 0 auto;
            background: white;
            border-radius: 15px;
            box-shadow: 0 20px 60px rgba(0,0,0,0.15);
            overflow: hidden;
        }}

        .header {{
            background: linear-gradient(135deg, #2980b9 0%, #1abc9c 100%);
            color: white;
            padding: 40px;
            text-align: center;
        }}

        .feasibility-badge {{
            display: inline-block;
            background: {level_color};
            color: white;
            padding: 10px 20px;
            border-radius: 25px;
            font-weight: bold;
            margin-top: 15px;
        }}

        .section {{
            background: #f8f9fa;
            margin: 25px 40px;
            padding: 25px;
            border-radius: 10px;
            border-left: 5px solid {level_color};
        }}

        .section h2 {{
            color: #2980b9;
            margin-bottom: 15px;
        }}

        .finding-item {{
            padding: 8px 12px;
            background: white;
            border-radius: 4px;
            margin-bottom: 6px;
        }}

        .finding-label {{
            font-weight: bold;
            color: #2980b9;
        }}

        .recommendation-item, .warning-item {{
            padding: 12px;
            margin-bottom: 10px;
            border-radius: 4px;
        }}

        .recommendation-item {{
            background: #f0f7ff;
            border-left: 4px solid #2980b9;
        }}

        .warning-item {{
            background: #fff5f0;
            border-left: 4px solid {self.color_scheme['Low']};
        }}

        .data-table {{
            width: 100%;
            border-collapse: collapse;
        }}

        .data-table th {{
            background: {level_color};
            color: white;
            padding: 10px;
            text-align: left;
        }}

        .data-table td {{
            padding: 8px 10px;
            border-bottom: 1px solid #ddd;
        }}

        .footer {{
            padding: 20px;
            text-align: center;
            color: #666;
            border-top: 1px solid #ddd;
            font-size: 0.9em;
        }}
    </style>
</head>
<body>
    <div class="container">
        <div class="header">
            <h1>RTRWH/AR Analysis Report</h1>
            <div>{title} Analysis</div>
            <div>Generated for: {html.escape(site.name)}</div>
            <div>Location: {html.escape(site.location)}, {html.escape(site.pincode)} (rainfall data: {html.escape(results.city)})</div>
            <div class="feasibility-badge">
                Feasibility: {results.feasibility_level.upper()} ({results.feasibility_score}/100)
            </div>
        </div>

        <div class="section">
            <h2>Key Results</h2>
{self._generate_findings_html(key_results(site, results, mode))}
        </div>

        <div class="section">
            <h2>Monthly Potential</h2>
            {table_html}
        </div>

        <div class="section">
            <h2>Recommendations</h2>
{self._generate_items_html(results.recommendations, 'recommendation-item')}
        </div>
{self._generate_warnings_section(results.warnings)}
        <div class="footer">
            Report generated: {generated_on}
        </div>
    </div>
</body>
</html>
"""

    def _generate_findings_html(self, lines: List[Tuple[str, str]]) -> str:
        """Generate HTML for key result lines"""
        items = []
        for label, value in lines:
            items.append(
                f'            <div class="finding-item"><span class="finding-label">{html.escape(label)}:</span> '
                f'{html.escape(value)}</div>'
            )
        return '\n'.join(items)

    def _generate_items_html(self, items, css_class: str) -> str:
        if not items:
            return f'            <div class="{css_class}">None</div>'
        return '\n'.join(
            f'            <div class="{css_class}">{html.escape(item)}</div>' for item in items
        )

    def _generate_warnings_section(self, warnings) -> str:
        """Important considerations, omitted when there are no warnings"""
        if not warnings:
            return ''
        return f"""
        <div class="section">
            <h2>Important Considerations</h2>
{self._generate_items_html(warnings, 'warning-item')}
        </div>
"""
