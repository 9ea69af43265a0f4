"""Plotly chart components for the dashboard."""

import numpy as np
import plotly.graph_objects as go
from typing import List

from Filter_Bank.core.moving_average import MovingAverageFilter
from Filter_Bank.core.response import frequency_sweep, sweep_frequencies

# Light theme colors (app uses #f8fafc background)
TEXT_COLOR = "#334155"
GRID_COLOR = "rgba(0,0,0,0.08)"
TICK_COLOR = "#64748b"
BORDER_COLOR = "#94a3b8"
ORIGINAL_COLOR = "#2196F3"
FILTERED_COLOR = "#4CAF50"


def create_signal_chart(times: List[float], original: List[float], filtered: List[float]) -> go.Figure:
    """Original vs. filtered traces over the display window."""
    fig = go.Figure()
    fig.add_trace(go.Scatter(x=times, y=original, mode='lines', name='Original',
                             line=dict(color=ORIGINAL_COLOR, width=1.5)))
    fig.add_trace(go.Scatter(x=times, y=filtered, mode='lines', name='Filtered',
                             line=dict(color=FILTERED_COLOR, width=2)))

    fig.update_layout(
        paper_bgcolor='rgba(0,0,0,0)', plot_bgcolor='rgba(0,0,0,0)',
        font={'color': TEXT_COLOR}, height=300, margin=dict(l=40, r=20, t=20, b=40),
        xaxis=dict(title="Time (s)", showgrid=True, gridcolor=GRID_COLOR),
        yaxis=dict(title="Amplitude", showgrid=True, gridcolor=GRID_COLOR, zeroline=True),
        legend=dict(orientation="h", y=1.1, x=0.5, xanchor="center")
    )
    return fig


def create_frequency_response_chart(filt, sample_rate: float, points: int = 200) -> go.Figure:
    """Magnitude response (dB) from DC to Nyquist, x-axis in Hz."""
    freqs_hz = sweep_frequencies(sample_rate, points)
    if isinstance(filt, MovingAverageFilter):
        magnitudes, _ = frequency_sweep(filt, freqs_hz / sample_rate)
    else:
        magnitudes, _ = frequency_sweep(filt, freqs_hz)

    magnitude_db = 20 * np.log10(np.maximum(magnitudes, 1e-6))

    fig = go.Figure(go.Scatter(x=freqs_hz, y=magnitude_db, mode='lines', name='|H(f)|',
                               line=dict(color='#0891b2', width=2)))
    fig.add_hline(y=-3, line_dash="dash", line_color="#d97706", annotation_text="-3 dB")
    cutoff = getattr(filt, 'cutoff_frequency', None)
    if cutoff is not None:
        fig.add_vline(x=cutoff, line_dash="dot", line_color="#dc2626", annotation_text="fc")

    fig.update_layout(
        paper_bgcolor='rgba(0,0,0,0)', plot_bgcolor='rgba(0,0,0,0)',
        font={'color': TEXT_COLOR}, height=250, margin=dict(l=40, r=20, t=20, b=40),
        xaxis=dict(title="Frequency (Hz)", showgrid=True, gridcolor=GRID_COLOR),
        yaxis=dict(title="Magnitude (dB)", range=[-60, 5], showgrid=True, gridcolor=GRID_COLOR),
        showlegend=False
    )
    return fig


def create_noise_reduction_gauge(noise_reduction: float) -> go.Figure:
    """Noise reduction (%) gauge."""
    color = "#059669" if noise_reduction >= 50 else "#d97706" if noise_reduction >= 20 else "#dc2626"

    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=noise_reduction,
        domain={'x': [0, 1], 'y': [0, 1]},
        title={'text': "Noise Reduction", 'font': {'size': 14, 'color': TEXT_COLOR}},
        number={'font': {'size': 32, 'color': color}, 'suffix': '%'},
        gauge={
            'axis': {'range': [0, 100], 'tickcolor': TICK_COLOR},
            'bar': {'color': color},
            'bgcolor': "rgba(0,0,0,0)",
            'bordercolor': BORDER_COLOR,
            'steps': [
                {'range': [0, 20], 'color': 'rgba(220,38,38,0.15)'},
                {'range': [20, 50], 'color': 'rgba(217,119,6,0.15)'},
                {'range': [50, 100], 'color': 'rgba(5,150,105,0.15)'}
            ]
        }
    ))

    fig.update_layout(
        paper_bgcolor='rgba(0,0,0,0)', plot_bgcolor='rgba(0,0,0,0)',
        font={'color': TEXT_COLOR}, height=220, margin=dict(l=20, r=20, t=40, b=20)
    )
    return fig
