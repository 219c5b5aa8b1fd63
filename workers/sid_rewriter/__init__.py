"""
sid_rewriter — compile-time string-ID preprocessor.

Rewrites ``SID( "name" )`` invocations in source files into hashed
integer literals annotated with the original string.
"""

__version__ = "0.1.0"
REWRITER_VERSION = "v0"
PACKAGE_NAME = "sid_rewriter"
SCHEMA_VERSION = "0.1"
