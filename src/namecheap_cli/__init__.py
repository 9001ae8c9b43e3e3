"""
Namecheap CLI

Command-line interface for the Namecheap client.
"""
