"""
Presentation Layer - Display State

The list the user sees and how each earthquake in it is formatted.
- Replaced wholesale after each load, never edited in place
- Opens an earthquake's detail page in the browser
"""
