"""Adapters exposing registered tools over MCP and on the command line."""
