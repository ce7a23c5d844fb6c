"""sizebot

Core package for the build-size comparison bot.

Why this exists
---------------
The comparison pipeline (``pipeline``), the external integrations (``tools``)
and the command line (``cli``) all need to agree on a few things:

* domain types (what one artifact record looks like, what the thresholds are)
* error types (which failures abort a run)
* IO/layout rules (where the two build trees live, how outputs are written)

Keeping those contracts here lets the other packages stay thin and keeps the
dependency direction one-way: nothing in this package imports from
``pipeline``, ``tools`` or ``cli``.
"""

from __future__ import annotations
