import pytest

from plsqldev import api


class FakeHost:
    """In-memory host, records what the exporter asked for."""

    def __init__(self):
        self.selected_text = ''
        self.sources = {}           # (object_type, object_name) -> source
        self.objects = []
        self.position = 0
        self.file = None            # file name or exception to raise
        self.folder = ''
        self.dialogs = []
        self.notifications = []
        self.clipboard = []
        self.clipboard_error = None
        self.broken_sources = set()

    def get_callbacks(self):
        return {name: getattr(self, name) for name in api.capabilities}

    def get_selected_text(self):
        return self.selected_text

    def get_object_source(self, object_type, object_owner, object_name):
        if object_name in self.broken_sources:
            raise RuntimeError("source of {} not available".format(object_name))
        return self.sources.get((object_type, object_name), "")

    def first_selected_object(self):
        self.position = 0
        return self.next_selected_object()

    def next_selected_object(self):
        if self.position >= len(self.objects):
            return None
        self.position += 1
        return self.objects[self.position - 1]

    def save_file_dialog(self):
        self.dialogs.append("file")
        if isinstance(self.file, Exception):
            raise self.file
        return self.file

    def save_folder_dialog(self):
        self.dialogs.append("folder")
        return self.folder

    def notify(self, message, caption, severity):
        self.notifications.append((message, caption, severity))

    def copy_to_clipboard(self, text):
        if self.clipboard_error:
            raise self.clipboard_error
        self.clipboard.append(text)


@pytest.fixture
def host():
    return FakeHost()
