"""
Energy API - payload records, HTTP client and render service.
"""
