# coding: utf-8
import sys, os, argparse, threading, logging
from importlib import metadata
#
from plsqldev import util
from plsqldev import api as host

#
# Session context shared by all actions: command line args, user config,
# host interface and the lock which serializes every change.
# Create it once and pass it around with session = ...
#

class Config(util.Attributed):

    # some arguments could be set on the OS level
    os_prefix       = 'FLYWAY_'
    os_args         = ['CONFIG', 'MILLISECONDS', 'LOG', 'USER', 'PWD', 'DSN']

    # search for config files, later files win
    config_files = [
        '{$ROOT}config/config.yaml',
        '{$HOME}/.plsqldev_flyway.yaml',
    ]

    # user config before any file is applied
    config_defaults = {
        'use_millisecond_precision' : False,
        'log_file'                  : '',
        'log_level'                 : 'DEBUG',
        'log_format'                : '%(asctime)s  %(levelname)-8s  %(name)s  %(message)s',
        'beep'                      : True,
    }

    # attributes passed from existing session
    shared_attributes = ['args', 'config', 'api', 'lock', 'root', 'debug', 'program', 'track_config', 'log_target']

    # distributions shown with -version
    versions = {
        'PLSQLDEV-FLYWAY'   : 'plsqldev-flyway',
        'PYYAML'            : 'pyyaml',
        'ORACLEDB'          : 'oracledb',
        'CHIME'             : 'chime',
    }



    def __init__(self, parser = None, args = None, api = None, session = None):
        # reuse existing session
        if session != None:
            for attr in self.shared_attributes:
                self[attr] = session[attr]
            self.is_curr_class = False
            if api != None:
                self.api = self.init_api(api)
            return

        # identify program relations
        self.parser         = parser or argparse.ArgumentParser(add_help = False)
        self.program        = os.path.basename(sys.argv[0]).split('.')[0]
        self.is_curr_class  = self.program == self.__class__.__name__.lower()

        # add global args
        group = self.parser.add_argument_group('ADJUST CONFIG')
        group.add_argument('-config',       help = 'Config file (YAML)',                                                nargs = '?')
        group.add_argument('-milliseconds', help = 'Use milliseconds in versioned file names',  type = util.is_boolean, nargs = '?', const = True, default = None)
        group.add_argument('-log',          help = 'Log file',                                                          nargs = '?')
        #
        group = self.parser.add_argument_group('ADJUST SCREEN OUTPUT')
        group.add_argument('-debug',        help = 'Show config and more details',              type = util.is_boolean, nargs = '?', const = True, default = False)
        group.add_argument('-version',      help = 'Show versions of used components',          type = util.is_boolean, nargs = '?', const = True, default = False)

        # parse arguments from command line only for the running program
        if self.is_curr_class:
            util.print_header('PLSQL DEVELOPER FLYWAY EXPORT: {}'.format(self.program.upper()))
            self.args = vars(self.parser.parse_args(args = args))
        else:
            self.args = vars(self.parser.parse_args(args = args if args != None else []))

        # merge with environment variables
        for arg in self.os_args:
            if not (arg.lower() in self.args) or self.args[arg.lower()] == None:
                value = os.getenv(self.os_prefix + arg.upper())
                if value != None:
                    self.args[arg.lower()] = value
        if isinstance(self.args.get('milliseconds'), str):
            self.args['milliseconds'] = util.is_boolean(self.args['milliseconds'])
        #
        self.args   = util.Attributed(self.args)                    # for passed attributes
        self.config = util.Attributed(dict(self.config_defaults))   # for user config
        self.debug  = self.args.get('debug')
        self.root   = util.fix_path(os.path.dirname(os.path.realpath(__file__)))
        self.lock   = threading.RLock()
        self.log_target = util.Attributed({'handler': None})         # file handler of this session

        # show component versions
        if self.is_curr_class and self.args.get('version'):
            self.show_versions()
            sys.exit()

        # load config files and setup logging
        self.init_config()
        self.init_logging()
        self.api = self.init_api(api)
        #
        if self.debug:
            util.print_header('CONFIG:')
            util.print_pipes(self.config, upper = False)



    def init_api(self, api):
        if api == None or isinstance(api, host.PlsqlDevApi):
            return api
        return host.PlsqlDevApi(api)    # validate capability table



    def init_config(self):
        self.track_config = {}
        files = list(self.config_files)
        if self.args.get('config'):
            if not os.path.exists(self.args.config):
                util.raise_error('CONFIG FILE NOT FOUND', self.args.config)
            files.append(self.args.config)

        # search for config file(s)
        for file in files:
            file = self.replace_tags(file)
            if os.path.exists(file):
                self.apply_config(file)

        # command line has the last word
        if self.args.get('milliseconds') != None:
            self.config['use_millisecond_precision'] = self.args.milliseconds
        if self.args.get('log'):
            self.config['log_file'] = self.args.log



    def apply_config(self, file):
        with open(file, 'rt', encoding = 'utf-8') as f:
            self.track_config[file] = {}
            for key, value in util.get_yaml(f, file):
                self.config[key]                = value
                self.track_config[file][key]    = value



    def replace_tags(self, payload):
        return payload.replace('{$ROOT}', self.root).replace('{$HOME}', os.path.expanduser('~'))



    def init_logging(self):
        logger = logging.getLogger()
        if self.log_target.handler != None:
            logger.removeHandler(self.log_target.handler)
            self.log_target.handler.close()
            self.log_target.handler = None
        #
        if not self.config.get('log_file'):
            return
        #
        handler = logging.FileHandler(os.path.expanduser(self.config.log_file), encoding = 'utf-8')
        handler.setFormatter(logging.Formatter(self.config.log_format, datefmt = '%Y-%m-%d %H:%M:%S'))
        logger.addHandler(handler)
        logger.setLevel(getattr(logging, str(self.config.log_level).upper(), logging.DEBUG))
        self.log_target.handler = handler



    def set_option(self, key, value):
        with self.lock:
            self.config[key] = value
            if key.startswith('log_'):
                self.init_logging()



    def show_versions(self):
        versions = {}
        versions['PYTHON'] = sys.version.split(' ')[0]
        for name, package in self.versions.items():
            try:
                versions[name] = metadata.version(package)
            except metadata.PackageNotFoundError:
                versions[name] = '-'
        #
        util.print_header('VERSIONS:')
        util.print_pipes(versions)

