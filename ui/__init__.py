"""
Drug Insight - UI Components

This package contains UI-related configuration:
- Theme colors and fonts
- Fallback CSS used when ui/theme.css is absent
- Progress milestones shown while an analysis runs
"""

__version__ = "1.0.0"

# UI configuration
THEME_CONFIG = {
    "primary_color": "#0ea5e9",
    "secondary_color": "#6366f1",
    "success_color": "#10b981",
    "warning_color": "#f59e0b",
    "error_color": "#ef4444",
    "font_family": "Inter, -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif"
}

CSS_PATH = "ui/theme.css"

FALLBACK_CSS = """
.main {{ font-family: {font_family}; }}
.hero-section {{
    background: linear-gradient(135deg, {primary_color} 0%, {secondary_color} 100%);
    padding: 2rem; border-radius: 10px; color: white; text-align: center;
}}
.finding-card {{
    padding: 0.75rem 1rem; border-radius: 8px; margin: 0.5rem 0;
    border-left: 4px solid var(--accent);
    background: rgba(0, 0, 0, 0.03);
}}
.demo-banner {{
    background: {warning_color}; color: white; padding: 0.5rem 1rem;
    border-radius: 8px; font-weight: 600;
}}
""".format(**THEME_CONFIG)

# Synthetic milestones displayed while the pipeline runs
ANALYSIS_STEPS = [
    ("Preprocessing text...", 20),
    ("Identifying drug mentions...", 40),
    ("Analyzing drug interactions...", 60),
    ("Detecting side effects...", 80),
    ("Generating summary...", 100),
]

__all__ = [
    "THEME_CONFIG",
    "CSS_PATH",
    "FALLBACK_CSS",
    "ANALYSIS_STEPS"
]
