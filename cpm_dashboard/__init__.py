"""Core modules for the cost-per-minute dashboard."""

from . import config, insights, logs, page, state, synth, ticker, utils, viz

__all__ = [
	"config",
	"insights",
	"logs",
	"page",
	"state",
	"synth",
	"ticker",
	"utils",
	"viz",
]
