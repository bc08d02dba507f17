# coding: utf-8
import datetime

versioned_prefix    = 'V'
repeatable_prefix   = 'R__'
separator           = '__'
extension           = '.sql'



def strip_extension(basename):
    # repeated export must not end with .sql.sql
    while basename.endswith(extension):
        basename = basename[:-len(extension)]
    return basename



def versioned_name(config, timestamp, basename):
    """Build V<timestamp>__<basename>.sql for the provided timestamp.

    Milliseconds are added only with use_millisecond_precision.
    """
    version = timestamp.strftime('%Y_%m_%d_%H_%M_%S')
    if config.get('use_millisecond_precision'):
        version += '.{:03d}'.format(timestamp.microsecond // 1000)
    #
    return '{}{}{}{}{}'.format(versioned_prefix, version, separator, strip_extension(basename), extension)



def get_versioned_filename(config, basename, timestamp = None):
    return versioned_name(config, timestamp or datetime.datetime.now(datetime.timezone.utc), basename)



def repeatable_name(object_name):
    return '{}{}{}'.format(repeatable_prefix, object_name.upper(), extension)

