"""
CSS styles for the dashboard.

Contains:
- get_css: CSS for the dashboard screen and its secret-entry overlay
"""

from .models import ColorTheme, THEME


def get_css(theme: ColorTheme = THEME) -> str:
    """Generate CSS for the dashboard using theme colors."""
    return f"""
DashboardScreen {{
    background: {theme.background};
    layers: base overlay;
}}

/* Top band: selection list beside the interface table */
#top-row {{
    height: 60%;
}}

#selection-panel {{
    width: 40%;
    height: 100%;
    border: heavy {theme.vpn_border};
    border-title-color: {theme.text};
    padding: 0 1;
}}

#selection-panel.wifi {{
    border: heavy {theme.wifi_border};
}}

#interface-panel {{
    width: 60%;
    height: 100%;
    border: solid {theme.border};
    border-title-color: {theme.text};
    padding: 0 1;
}}

/* Scrolling throughput graph */
#graph-panel {{
    height: 1fr;
    border: round {theme.border};
    border-title-color: {theme.text};
    padding: 0 1;
}}

#status-bar {{
    height: 3;
    border: round {theme.border};
    color: {theme.text_dim};
}}

/* Secret entry overlay, hidden until a secret is requested */
#overlay {{
    layer: overlay;
    width: 100%;
    height: 100%;
    align: center middle;
    background: {theme.background} 60%;
    display: none;
}}

#overlay.visible {{
    display: block;
}}

#secret-prompt {{
    width: 50%;
    height: 5;
    border: double {theme.secret_border};
    border-title-color: {theme.secret_border};
    background: {theme.surface};
    content-align: center middle;
    text-align: center;
}}
"""
