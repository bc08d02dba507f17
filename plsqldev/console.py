# coding: utf-8
import sys, os
#
from plsqldev import util
from plsqldev import api
from plsqldev import queries as query

#
# Host for the command line: the selection and dialog answers come from args,
# object sources from the database, notifications go to the screen.
#

class Console:

    def __init__(self, args, config):
        self.args       = args
        self.config     = config
        self.conn       = None      # connect on first request
        self.selection  = []
        self.position   = 0



    def get_callbacks(self):
        callbacks = {}
        for name in api.capabilities:
            callbacks[name] = getattr(self, name)
        return callbacks



    def get_connection(self):
        if self.conn == None:
            from plsqldev import wrapper
            util.assert_(self.args.get('user') and self.args.get('dsn'), 'MISSING ARGUMENT: USER OR DSN')
            #
            self.conn = wrapper.Oracle(tns = {
                'user'  : self.args.user,
                'pwd'   : self.args.get('pwd') or '',
                'dsn'   : self.args.dsn,
                'thick' : self.args.get('thick') or '',
            }, debug = self.args.get('debug'))
        return self.conn



    def get_selection(self):
        owner = (self.args.get('owner') or self.args.get('user') or '').upper()
        types = [object_type.upper() for object_type in (self.args.get('type') or [])]
        names = [object_name.upper() for object_name in (self.args.get('name') or [])]
        #
        selection = []
        for i, object_name in enumerate(names):
            if len(types) == 1:
                object_type = types[0]
            elif i < len(types):
                object_type = types[i]
            else:
                object_type = self.get_connection().fetch_value(query.object_type, object_owner = owner, object_name = object_name) or ''
            #
            selection.append(api.SelectedObject(object_type, owner, object_name))
        return selection



    def get_selected_text(self):
        file = self.args.get('versioned')
        if not file or not os.path.exists(file):
            return ''
        return util.get_file_content(file)



    def get_object_source(self, object_type, object_owner, object_name):
        conn = self.get_connection()
        args = {
            'object_type'   : object_type,
            'object_owner'  : object_owner,
            'object_name'   : object_name,
        }
        #
        if object_type == 'VIEW':
            text = conn.fetch_value(query.view_source, **args)
            if text == None:
                return ''
            return query.template_view.format(object_name = object_name.lower(), text = text.strip())
        #
        lines = [row[0] for row in conn.fetch(query.object_source, **args)]
        if len(lines) == 0:
            if object_type.endswith(' BODY'):
                return query.template_body_missing.format(**args)
            return ''
        return 'create or replace ' + ''.join(lines)



    def first_selected_object(self):
        self.selection  = self.get_selection()
        self.position   = 0
        return self.next_selected_object()



    def next_selected_object(self):
        if self.position >= len(self.selection):
            return None
        self.position += 1
        return self.selection[self.position - 1]



    def save_file_dialog(self):
        file = self.args.get('file')
        if file == None:
            raise api.DialogCancelled()
        if file.strip() == '':
            raise api.DialogEmptyName()
        return file



    def save_folder_dialog(self):
        return self.args.get('folder') or os.getcwd()     # current folder when not passed



    def notify(self, message, caption, severity):
        util.print_header('{}:'.format(caption.upper()))
        for line in message.strip().splitlines():
            util.print_help(line)
        print()
        #
        if self.config.get('beep'):
            if severity == api.ERROR:
                util.beep_error()
            else:
                util.beep_success()



    def copy_to_clipboard(self, text):
        sys.stdout.write(text)
        sys.stdout.flush()



def get_api(args, config):
    return api.PlsqlDevApi(Console(args, config).get_callbacks())

