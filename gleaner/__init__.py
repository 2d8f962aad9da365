"""
Declarative structured extraction from HTML.

This package turns an HTML document and a mapping description (selectors
bound to record fields, with repeated child records) into a typed record.
Derived fields are computed lazily and memoized per record, and a validity
gate tells an empty page from a page whose structure no longer matches.

The package performs no I/O: callers fetch documents and pass them in.
"""
