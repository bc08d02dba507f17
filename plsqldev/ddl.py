# coding: utf-8
import re, logging

log = logging.getLogger(__name__)

#
# The header of every object is rewritten by a single pattern, there is no SQL
# parser behind it. Groups in order:
#   1 editionable/noneditionable, 2 object kind, 3 body marker,
#   4 parameter list, 5 force, 6 is/as, 7 rest of the line
#
# When the pattern does not match, the DDL is returned untouched.
#
ddl_header = re.compile(
    r'create or replace (editionable|noneditionable)?\s*'
    r'(package|type|view|trigger|function|procedure)\s*(body )?[a-z0-9_$"]+\s*'
    r'(\([a-z0-9._$", ]+\))?\s*(force )?(is|as)?(.*)',
    flags = re.I
)

# what the IDE returns for a spec without body
body_not_available = re.compile(r'/\* Source of (TYPE|PACKAGE) BODY [A-Za-z0-9$_"]+ is not available \*/.*')

# object types with specification and body
body_types = {
    'PACKAGE'   : 'PACKAGE BODY',
    'TYPE'      : 'TYPE BODY',
}



def ensure_owner(ddl, object_type, object_owner, object_name):
    """Replace object name in the DDL header with owner.name.

    Views are created with force, types get "force" in front of is/as so they
    can be replaced while having dependents. Triggers get a line break instead
    of the is/as keyword.
    """
    log.debug('Object source: %s', ddl)

    def rebuild(found):
        editionable = (found.group(1) or '').lower()
        is_or_as    = (found.group(6) or '').lower()
        if object_type == 'TRIGGER':
            is_or_as = '\n'
        #
        return 'create or replace {}{}{} {}{}.{}{} {}{}{}'.format(
            editionable + ' ' if editionable in ('editionable', 'noneditionable') else '',
            'force ' if object_type == 'VIEW' else '',
            found.group(2).lower(),
            (found.group(3) or '').lower(),
            object_owner,
            object_name,
            found.group(4) or '',
            'force ' if object_type == 'TYPE' else '',
            is_or_as,
            found.group(7) or '',
        )
    #
    result = ddl_header.sub(rebuild, ddl, count = 1)
    log.debug('Final DDL: %s', result)
    return result



def is_body_missing(payload):
    return body_not_available.search(payload.strip()) != None



def assemble(object_type, object_owner, object_name, fetch):
    """Get the migration payload for one object, fetch(kind, owner, name) provides the source."""
    if not (object_type in body_types):
        return ensure_owner(fetch(object_type, object_owner, object_name), object_type, object_owner, object_name)
    #
    body_type   = body_types[object_type]
    spec        = ensure_owner(fetch(object_type,   object_owner, object_name), object_type, object_owner, object_name)
    body        = ensure_owner(fetch(body_type,     object_owner, object_name), body_type,   object_owner, object_name)
    #
    if is_body_missing(body):
        return '{}\n/\n'.format(spec.strip())
    return '{}\n/\n{}\n/\n'.format(spec.strip(), body.strip())



def get_object_source_and_body(api, selected_object):
    # fetches the source of a package or type including its body
    return assemble(selected_object.object_type, selected_object.object_owner, selected_object.object_name, fetch = api.get_object_source)



def get_object_source(api, selected_object):
    # views, triggers, functions and procedures
    return ensure_owner(
        api.get_object_source(selected_object.object_type, selected_object.object_owner, selected_object.object_name),
        selected_object.object_type,
        selected_object.object_owner,
        selected_object.object_name,
    )

