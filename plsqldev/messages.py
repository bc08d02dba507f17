# coding: utf-8

empty_selection = """
Cowardly refusing to create an empty migration.
Please select some text and try again.
""".lstrip()

empty_file_name     = 'Please enter a file name!'
io_error            = 'I/O error: {}'
error_caption       = 'Error'

# repeatable migrations
nothing_selected            = 'Please select an object in the object browser first!'
nothing_selected_caption    = 'Nothing selected'
multiple_versioned          = 'Exporting multiple selected objects as versioned and repeatable migrations is not supported!'
multiple_versioned_caption  = 'Information'
repeatable_caption          = 'Repeatable migration'
repeatable_success          = 'Successfully exported {} objects as repeatable migration(s).'
repeatable_failed           = """
No repeatable migrations were created!
Please make sure you have selected one or more supported
object types.
""".strip()
unsupported_type            = '{} is not a supported object type'
no_folder                   = 'No folder selected, no repeatable migrations were created!'

# clipboard export
register_export     = 'Export to clipboard in Wiki syntax'
clipboard_success   = 'Results copied to clipboard'
clipboard_failed    = 'An error occured. If this problem persists, please file a bug report.'

