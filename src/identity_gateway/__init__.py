"""Platform identity and signature gateway.

This package lets a backend exchange platform OAuth codes for tokens, resolve
platform users into internal students and teachers, sign privileged platform
requests and hand out JSAPI authorization configs to embedded client SDKs.
"""

__version__ = "0.1.0"
