"""MCP server exposing wage level tools."""
