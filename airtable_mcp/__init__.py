"""
Airtable MCP Server
Exposes Airtable base, table and record operations as MCP tools and HTTP routes
"""

__version__ = "1.0.0"
