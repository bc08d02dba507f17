# coding: utf-8
import os, argparse, csv, logging
#
import config
from plsqldev import util
from plsqldev import messages
from plsqldev import api as host

log = logging.getLogger(__name__)



class ExportData:
    """Buffer for result grid export, fed one cell at a time.

    Cells before mark_prepared() are column headers, cells after that are data.
    A row is complete when it has as many cells as there are headers.
    """

    def __init__(self):
        self.init()



    def init(self):
        self.headers        = []
        self.data           = []
        self.current_row    = []
        self.prepared       = False



    def num_columns(self):
        return len(self.headers)



    def feed(self, value):
        # still in header part
        if not self.prepared:
            self.headers.append(value)
            return

        # append to current row, start a new row when complete
        # with no headers the row never completes
        self.current_row.append(value)
        if len(self.current_row) == self.num_columns():
            self.data.append(self.current_row)
            self.current_row = []



    def mark_prepared(self):
        self.prepared = True



    def to_string(self):
        # wiki syntax, headers with double pipes
        lines = ['||' + ''.join(['{}||'.format(header) for header in self.headers])]
        for row in self.data:
            lines.append('|' + ''.join(['{}|'.format(cell) for cell in row]))
        return '\n'.join(lines) + '\n'



    # names used by the grid export protocol
    reset       = init
    serialize   = to_string



class Export_Data(config.Config):

    def define_parser(self):
        parser = argparse.ArgumentParser(add_help = False)

        # actions and flags
        group = parser.add_argument_group('MAIN ACTIONS')
        group.add_argument('-csv',          help = 'CSV file to export in Wiki syntax',                                 nargs = '?')
        group.add_argument('-delimiter',    help = 'CSV delimiter',                                                     nargs = '?', default = ';')
        #
        return parser



    def __init__(self, parser = None, args = None, api = None, session = None):
        self.parser = parser or self.define_parser()
        super().__init__(parser = self.parser, args = args, api = api, session = session)
        #
        self.export_data = ExportData()

        # running from command line
        if self.is_curr_class:
            if self.api == None:
                from plsqldev import console
                self.api = console.get_api(self.args, self.config)
            #
            if self.args.get('csv'):
                self.export_file(self.args.csv)
            else:
                util.print_help('nothing to do, use -csv')
                print()



    def register_export(self):
        return messages.register_export



    def export_init(self):
        with self.lock:
            self.export_data.init()
        return True



    def export_data_cell(self, value):
        # cells not in UTF-8 are replaced by a question mark
        if isinstance(value, bytes):
            try:
                value = value.decode('utf-8')
            except UnicodeDecodeError:
                value = '?'
        #
        with self.lock:
            self.export_data.feed(value)
        return True



    def export_prepare(self):
        with self.lock:
            self.export_data.mark_prepared()
        return True



    def export_finished(self):
        with self.lock:
            payload = self.export_data.to_string()
        #
        try:
            self.api.copy_to_clipboard(payload)
            caption = messages.clipboard_success
        except Exception:
            log.exception('Copy to clipboard failed')
            caption = messages.clipboard_failed
        #
        self.api.notify(caption, caption, host.INFO)
        return caption == messages.clipboard_success



    def export_file(self, file):
        if not os.path.exists(file):
            util.raise_error('FILE NOT FOUND', file)
        #
        self.export_init()
        with open(file, mode = 'rt', encoding = 'utf-8', newline = '') as csv_file:
            csv_reader = csv.reader(csv_file, delimiter = self.args.get('delimiter') or ';')
            for i, row in enumerate(csv_reader):
                for value in row:
                    self.export_data_cell(value)
                if i == 0:
                    self.export_prepare()
        #
        return self.export_finished()



if __name__ == "__main__":
    Export_Data()

