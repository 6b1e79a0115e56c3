"""
create_lafken.templates - Bundled Project Template
==================================================

The ``project/`` directory next to this file is the template tree every
new lafken project is materialized from. It is walked as-is, so every
file and directory under it ends up in the generated project.

Template Naming Convention
--------------------------
- Files ending in `.eta` are rendered with Jinja2
- Output filename = template name without `.eta`
- Every other file is copied byte-for-byte

Template Context
----------------
All templates receive:

    appName : str
        Project name

    services : list[str]
        Selected service identifiers (api, auth, bucket, dynamo, event,
        queue, schedule, state-machine), in selection order

    uuid : str
        Identifier generated for this project

Undefined names are an error (``StrictUndefined``), so a template must
only reference these three.

See Also
--------
- materializer.py: Walks and renders this tree
- models.py: TemplateContext passed to templates
"""

# This file intentionally left mostly empty.
# The template tree is located through generator.TEMPLATE_DIR.
