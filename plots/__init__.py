"""Spectrum chart Django app.

Mount definitions, data source resolution, Plotly payload builders, and the
views that hand a chart off to the browser renderer live here. The parsing and
scheduling logic lives in the Django-free `spectrum` package.
"""
