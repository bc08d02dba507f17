# coding: utf-8
import sys, os, re, traceback
import yaml         # pip3 install pyyaml       --upgrade
import chime        # pip3 install chime        --upgrade



class Attributed(dict):

    __getattr__ = dict.__getitem__
    __setattr__ = dict.__setitem__
    __delattr__ = dict.__delitem__



def get_callstack():
    stack = []
    for row in traceback.format_stack():
        file = os.path.basename(extract('["]([^"]+)', row))
        line = extract(r', line (\d+),', row)
        stack.append((file, line,))
    return stack[:-2]



def extract(regexp_search, text, group = 1, flags = 0):
    if regexp_search == '':
        return ''
    #
    found = re.search(regexp_search, text, flags = flags)
    if found:
        return found.group(group)
    return ''



def fix_path(dir):
    return os.path.normpath(dir).replace('\\', '/').rstrip('/') + '/'



def get_file_content(file):
    with open(file, 'rt', encoding = 'utf-8') as f:
        return f.read()



def write_file(file, payload, mode = 'wt'):
    # errors are left to the caller
    folder = os.path.dirname(file)
    if folder and not os.path.exists(folder):
        os.makedirs(folder)
    #
    if isinstance(payload, list):
        payload = '\n'.join(payload) + '\n'
    #
    with open(file, mode, encoding = 'utf-8', newline = '\n') as w:
        w.write(payload)
    return file



def get_yaml(h, file = ''):
    try:
        data = list(yaml.load_all(h, Loader = yaml.loader.SafeLoader))
    except yaml.YAMLError:
        raise_error('INVALID YAML FILE!', '{}\n'.format(file) if file != '' else '')
    #
    if len(data) > 0 and isinstance(data[0], dict):
        return data[0].items()
    return {}.items()



def print_header(message, append = ''):
    if append == None:
        append = ''
    print('\n{}{}\n{}'.format(message, (' ' + str(append)).rstrip(), '-' * len(message)))



def print_help(message):
    print('  -> {}'.format(message))



def print_pipes(payload, pattern = '  {:>18} | {}', upper = True, skip_none = True):
    for key in sorted(payload.keys()):
        value = payload[key]
        if skip_none and value == None:
            continue
        print(pattern.format(key.upper() if upper else key, value))
    print()



def is_boolean(v):
    # to allow argparse evaluate to True, False AND None
    if isinstance(v, bool):
        return v
    if str(v).upper() in ('ON', 'YES', 'Y', 'TRUE', '1'):
        return True
    if str(v).upper() in ('OFF', 'NO', 'N', 'FALSE', '0'):
        return False
    return None



def beep_success():
    chime.success()



def beep_error():
    chime.error()



def raise_error(message = '', *extras):
    file, line = get_callstack()[-1]

    # print exception to screen
    splitter    = 80 * '#'
    exception   = traceback.format_exc().rstrip()
    if exception != 'NoneType: None':
        print('\n{}\n{}\n{}'.format(splitter, exception, splitter))

    # show more friendly message at the end
    message = 'ERROR: {}'.format(message)
    print('\n{}   @{} {}\n{}'.format(message, file, line, '-' * len(message)))
    #
    for line in extras:
        if line != None and line != '':
            print_help(str(line).rstrip())
    print()
    sys.exit(1)



def assert_(condition, message, *extras):
    if (not condition or condition == None or condition == ''):
        message = 'ASSERT: {}'.format(message)
        print('\n{}\n{}'.format(message, '-' * len(message)))
        for line in extras:
            print_help(line.rstrip())
        print()
        sys.exit(1)

