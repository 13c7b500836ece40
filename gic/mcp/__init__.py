"""MCP Server Package"""
