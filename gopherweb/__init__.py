"""gopherweb: a Gopher-to-web gateway.

Serves arbitrary web pages to Gopher clients as gophermaps, rewriting every
hyperlink so that following it re-enters the gateway.
"""

__version__ = "0.1.0"
