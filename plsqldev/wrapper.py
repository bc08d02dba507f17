# coding: utf-8
import os, traceback
import oracledb         # pip3 install oracledb     --upgrade
#
from plsqldev import util



class Oracle:

    def __init__(self, tns, debug = False):
        self.conn       = None    # recent connection link
        self.curs       = None    # recent cursor
        self.cols       = []      # recent columns
        self.debug      = debug
        self.tns        = {
            'lang'      : '.AL32UTF8',
        }
        if not isinstance(tns, dict):
            util.raise_error('DB_CONNECT EXPECTS DICTIONARY')
        #
        self.tns.update(tns)
        self.tns = util.Attributed(self.tns)
        #
        self.connect()



    def __del__(self):
        self.disconnect()



    def connect(self):
        self.disconnect()       # to use as reconnect
        os.environ['NLS_LANG'] = self.tns.lang

        # might need to adjust client for classic connections
        thick = self.tns.get('thick', None)
        if thick in ('Y', 'CLIENT_HOME', 'ORACLE_HOME'):
            thick = os.environ.get('CLIENT_HOME') or os.environ.get('ORACLE_HOME') or 'Y'
        if thick:
            if os.path.exists(thick):
                oracledb.init_oracle_client(lib_dir = thick)
            else:
                oracledb.init_oracle_client()
        #
        try:
            self.conn = oracledb.connect(
                user        = self.tns.user,
                password    = self.tns.pwd,
                dsn         = self.tns.dsn
            )
        except oracledb.Error:
            if self.debug:
                print(traceback.format_exc())
            util.raise_error('CONNECTION FAILED', self.get_error_code())

        # convert CLOB to string
        self.conn.outputtypehandler = self.output_type_handler



    def output_type_handler(self, cursor, metadata):
        if metadata.type_code is oracledb.DB_TYPE_CLOB:
            return cursor.var(oracledb.DB_TYPE_LONG, arraysize = cursor.arraysize)



    def disconnect(self):
        if self.conn:
            try:
                self.conn.close()
            except oracledb.Error:
                pass
            self.conn = None



    def get_error_code(self):
        message = ''
        for line in traceback.format_exc().splitlines():
            for search in (': ORA-', ': DPY-',):
                chunks = line.split(search)
                if len(chunks) > 1:
                    message = '{}{}\n'.format(search.replace(': ', ''), chunks[1])
        return message



    def get_binds(self, query, binds):
        # remove passed arguments which are not in the query
        pass_binds = {}
        for key, value in binds.items():
            if ':{}'.format(key) in query:
                pass_binds[key] = None if value == '' else value
        return pass_binds



    def fetch(self, query, **binds):
        self.curs = self.conn.cursor()
        self.curs.arraysize = 5000
        data = self.curs.execute(query.strip(), **self.get_binds(query, binds)).fetchall()
        #
        self.cols = [row[0].lower() for row in self.curs.description]
        return data



    def fetch_value(self, query, **binds):
        data = self.fetch(query, **binds)
        if len(data):
            return data[0][0]
        return None

