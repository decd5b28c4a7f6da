#!/usr/bin/env python
"""
Development convenience script to run the Component Registry MCP server.
"""
import sys
import os

# Add src directory to path
src_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'src')
sys.path.insert(0, src_path)

from component_registry_mcp.server import main

if __name__ == "__main__":
    main()
