# coding: utf-8
import collections

#
# Everything the exporter needs from the host IDE goes through this interface.
# The host hands over a table of capabilities (name -> callable), the table is
# validated once when the session starts.
#

INFO    = 'INFO'
ERROR   = 'ERROR'

# capabilities every host has to provide
capabilities = (
    'get_selected_text',
    'get_object_source',
    'first_selected_object',
    'next_selected_object',
    'save_file_dialog',
    'save_folder_dialog',
    'notify',
    'copy_to_clipboard',
)



class SelectedObject(collections.namedtuple('SelectedObject', ['object_type', 'object_owner', 'object_name', 'sub_object'])):

    __slots__ = ()

    def __new__(cls, object_type, object_owner, object_name, sub_object = ''):
        return super().__new__(cls, object_type, object_owner, object_name, sub_object)

    def __str__(self):
        return '{}.{} ({})'.format(self.object_owner, self.object_name, self.object_type)



class DialogCancelled(Exception):
    pass



class DialogEmptyName(Exception):
    pass



class DialogError(Exception):
    pass



class MissingCapabilityError(Exception):

    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__('HOST IS MISSING CAPABILITIES: {}'.format(', '.join(self.missing)))



class PlsqlDevApi:

    def __init__(self, callbacks):
        missing = []
        for name in capabilities:
            if not callable(callbacks.get(name)):
                missing.append(name)
        if len(missing) > 0:
            raise MissingCapabilityError(missing)
        #
        self.callbacks = dict(callbacks)



    def get_selected_text(self):
        return self.callbacks['get_selected_text']() or ''



    def get_object_source(self, object_type, object_owner, object_name):
        return self.callbacks['get_object_source'](object_type, object_owner, object_name) or ''



    def first_selected_object(self):
        return self.callbacks['first_selected_object']()



    def next_selected_object(self):
        return self.callbacks['next_selected_object']()



    def save_file_dialog(self):
        """Returns chosen file name or raises DialogCancelled, DialogEmptyName or DialogError."""
        return self.callbacks['save_file_dialog']()



    def save_folder_dialog(self):
        """Returns chosen folder, empty string when the user cancelled."""
        return self.callbacks['save_folder_dialog']() or ''



    def notify(self, message, caption, severity = INFO):
        self.callbacks['notify'](message, caption, severity)



    def copy_to_clipboard(self, text):
        self.callbacks['copy_to_clipboard'](text)

