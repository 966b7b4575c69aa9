"""Bundle advisor: find size optimisations in webpack / Rollup / Vite stats."""

__version__ = "0.1.0"
