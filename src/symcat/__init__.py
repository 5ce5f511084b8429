"""symcat -- curated catalog of scripting define symbols.

Keeps a human-edited catalog of build define symbols (with headers,
separators, and descriptions) in sync with the flat ``;``-joined define
string each build target group actually reads.
"""

__version__ = "0.1.0"
