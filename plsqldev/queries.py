# coding: utf-8

object_type = """
SELECT MIN(o.object_type) AS object_type
FROM all_objects o
WHERE o.owner           = :object_owner
    AND o.object_name   = :object_name
    AND o.object_type   IN ('FUNCTION', 'PROCEDURE', 'PACKAGE', 'TYPE', 'VIEW', 'TRIGGER')
"""

# views are not in ALL_SOURCE
view_source = """
SELECT v.text
FROM all_views v
WHERE v.owner           = :object_owner
    AND v.view_name     = :object_name
"""

object_source = """
SELECT s.text
FROM all_source s
WHERE s.owner           = :object_owner
    AND s.name          = :object_name
    AND s.type          = :object_type
ORDER BY s.line
"""

template_view = 'create or replace view {object_name} as\n{text}'

# same text as the IDE returns for missing body
template_body_missing = '/* Source of {object_type} {object_name} is not available */'

