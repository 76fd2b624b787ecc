"""Hash-gated publishing of resource packages.

The flow lives in :mod:`runners.services.publish.manager`; the modules next to
it are the default collaborators it is wired with by
:func:`runners.services.publish.factory.create_runners_manager`.
"""

from __future__ import annotations
