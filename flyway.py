# coding: utf-8
import os, argparse, logging
#
import config
from plsqldev import util
from plsqldev import ddl
from plsqldev import naming
from plsqldev import messages
from plsqldev import api as host

log = logging.getLogger(__name__)



class FlywayError(Exception):

    message = '{}'

    def __init__(self, *args):
        super().__init__(self.message.format(*args))



class EmptySelectionError(FlywayError):
    message = messages.empty_selection



class EmptyFileNameError(FlywayError):
    message = messages.empty_file_name



class UnsupportedObjectTypeError(FlywayError):
    message = messages.unsupported_type



class ExportIOError(FlywayError):
    message = messages.io_error



class Flyway(config.Config):

    supported_types = ['FUNCTION', 'PROCEDURE', 'PACKAGE', 'TYPE', 'VIEW', 'TRIGGER']



    def define_parser(self):
        parser = argparse.ArgumentParser(add_help = False)

        # actions and flags
        group = parser.add_argument_group('MAIN ACTIONS')
        group.add_argument('-versioned',    help = 'Create versioned migration from file with SQL',                     nargs = '?')
        group.add_argument('-repeatable',   help = 'Export objects as repeatable migrations',   type = util.is_boolean, nargs = '?', const = True, default = False)
        group.add_argument('-both',         help = 'Export object as repeatable + versioned',   type = util.is_boolean, nargs = '?', const = True, default = False)

        # limit scope by object type and name
        group = parser.add_argument_group('LIMIT SCOPE')
        group.add_argument('-type',         help = 'Object type(s), one for all names or one per name',                 nargs = '*')
        group.add_argument('-owner',        help = 'Object owner (schema)',                                             nargs = '?')
        group.add_argument('-name',         help = 'Object name(s)',                                                    nargs = '*')

        # targets
        group = parser.add_argument_group('TARGET FILES')
        group.add_argument('-file',         help = 'Base name for versioned migration',                                 nargs = '?')
        group.add_argument('-folder',       help = 'Folder for repeatable migrations, current folder by default',      nargs = '?')

        # connection for object sources
        group = parser.add_argument_group('PROVIDE CONNECTION DETAILS')
        group.add_argument('-user',         help = 'User name',                                                         nargs = '?')
        group.add_argument('-pwd',          help = 'User password',                                                     nargs = '?')
        group.add_argument('-dsn',          help = 'Connect string like host:port/service',                             nargs = '?')
        group.add_argument('-thick',        help = 'Thick client path or \'Y\' for auto resolve',                       nargs = '?')
        #
        return parser



    def __init__(self, parser = None, args = None, api = None, session = None):
        self.parser = parser or self.define_parser()
        super().__init__(parser = self.parser, args = args, api = api, session = session)

        # running from command line, answer host requests from args
        if self.is_curr_class:
            if self.api == None:
                from plsqldev import console
                self.api = console.get_api(self.args, self.config)
            self.run()



    def run(self):
        if self.args.get('versioned'):
            self.create_versioned_migration()
        elif self.args.get('repeatable') or self.args.get('both'):
            self.create_repeatable_migration(export_versioned = self.args.get('both'))
        else:
            util.print_help('nothing to do, use -versioned, -repeatable or -both')
            print()



    def create_versioned_migration(self):
        # menu action, errors go to the user
        try:
            return self.export_versioned()
        except FlywayError as e:
            log.error('Versioned migration failed: %s', e)
            self.api.notify(str(e), messages.error_caption, host.ERROR)



    def export_versioned(self):
        """Write selected text to V<timestamp>__<basename>.sql.

        Returns the created file, None when user cancelled the dialog.
        The text is written as it is, there is no object to normalize.
        """
        with self.lock:
            payload = self.api.get_selected_text()
            if len(payload) == 0:
                raise EmptySelectionError()

            # get basename from user
            try:
                file = self.api.save_file_dialog()
            except host.DialogCancelled:
                log.debug('Save dialog cancelled')
                return None
            except host.DialogEmptyName:
                raise EmptyFileNameError()
            except host.DialogError as e:
                raise ExportIOError(e)
            #
            if not file or not os.path.basename(file):
                raise EmptyFileNameError()

            # construct versioned file name next to the chosen file
            folder, basename    = os.path.split(file)
            target              = os.path.join(folder, naming.get_versioned_filename(self.config, basename))
            #
            try:
                util.write_file(target, payload)
            except OSError as e:
                raise ExportIOError(e)
            #
            log.info('Versioned migration created: %s', target)
            return target



    def create_repeatable_migration(self, export_versioned = False):
        """Export all selected objects as R__<NAME>.sql and optionally as versioned migrations.

        Returns summary with exported_count and list of failed objects.
        """
        with self.lock:
            summary = util.Attributed({
                'exported_count'    : 0,
                'failed'            : [],
            })
            #
            selected_object = self.api.first_selected_object()
            if selected_object == None:
                self.api.notify(messages.nothing_selected, messages.nothing_selected_caption, host.INFO)
                return summary

            # versioned export works for one object only
            if export_versioned and self.api.next_selected_object() != None:
                self.api.notify(messages.multiple_versioned, messages.multiple_versioned_caption, host.INFO)
                return summary
            #
            log.debug('Selected object: %s', selected_object)
            folder = self.api.save_folder_dialog()
            log.debug('Selected folder: %s', folder)
            #
            if not folder:
                log.warning('No folder selected')
                self.api.notify(messages.no_folder, messages.repeatable_caption, host.ERROR)
                return summary

            # objects are independent, failed one does not stop the rest
            while selected_object != None:
                try:
                    self.export_object_as_repeatable_migration(folder, selected_object, export_versioned)
                    summary.exported_count += 1
                except FlywayError as e:
                    log.warning('Skipping %s: %s', selected_object, e)
                    summary.failed.append(str(selected_object))
                except Exception:
                    log.exception('Export of %s failed', selected_object)
                    summary.failed.append(str(selected_object))
                #
                selected_object = self.api.next_selected_object()
                if selected_object != None:
                    log.debug('Selected object: %s', selected_object)

            # show summary
            if summary.exported_count > 0:
                self.api.notify(messages.repeatable_success.format(summary.exported_count), messages.repeatable_caption, host.INFO)
            else:
                self.api.notify(messages.repeatable_failed, messages.repeatable_caption, host.ERROR)
            #
            return summary



    def export_object_as_repeatable_migration(self, folder, selected_object, export_versioned = False):
        if not (selected_object.object_type in self.supported_types):
            raise UnsupportedObjectTypeError(selected_object.object_type)
        #
        if selected_object.object_type in ddl.body_types:
            payload = ddl.get_object_source_and_body(self.api, selected_object)
        else:
            payload = ddl.get_object_source(self.api, selected_object)
        #
        basename    = selected_object.object_name.upper()
        files       = []
        if export_versioned:
            files.append(util.write_file(os.path.join(folder, naming.get_versioned_filename(self.config, basename)), payload))
        files.append(util.write_file(os.path.join(folder, naming.repeatable_name(basename)), payload))
        #
        return files



if __name__ == "__main__":
    Flyway()

