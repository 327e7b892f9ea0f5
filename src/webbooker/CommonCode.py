#!/usr/bin/env python


"""
CommonCode.py

Copyright 2024 by the WebBooker authors

Distributable under the GNU General Public License Version 3 or newer.

Options, configuration and exceptions shared by the WebBooker modules.

"""
import configparser
import os

from libgutenberg.CommonOptions import Options
from libgutenberg.Logger import debug

class Struct(object):
    pass

options = Options()


class WebbookerError(Exception):
    """ Base class for WebBooker errors. """
    pass

class MissingTitleError(WebbookerError, ValueError):
    """ The book has no title. """
    def __init__(self, msg='missing title'):
        WebbookerError.__init__(self, msg)

class PackageError(WebbookerError):
    """ The manifest and the spine of the package don't match. """
    pass

class ContainerWriteError(WebbookerError):
    """ Writing an entry of the zip container failed. """
    pass

class WebbookerBadFileException(WebbookerError):
    """ An input file is not usable. """
    pass


class Job(object):
    """Hold 'globals' for a job.

    A job is defined as one unit of work: one book in one output format.

    """

    def __init__(self, type_):
        self.type = type_
        self.book = None
        self.outputdir = None
        self.outputfile = None


    def __str__(self):
        l = []
        for k, v in self.__dict__.items():
            l.append("%s: %s" % (k, v))
        return '\n'.join(l)


def get_option(name, default=None):
    """ Get an option, or default if the command line didn't set it. """
    value = getattr(options, name, None)
    return default if value is None else value


def get_config(name, default=None):
    """ Get a config file value, or default. """
    config = getattr(options, 'config', None)
    value = getattr(config, name.upper(), None)
    return default if value is None else value


def add_common_options(ap, user_config_file):
    """ Add options common to all programs. """

    ap.add_argument(
        "--verbose", "-v",
        action="count",
        default=0,
        help="be verbose (-v -v be more verbose)")

    ap.add_argument(
        "--config",
        metavar="CONFIG_FILE",
        dest="config_file",
        action="store",
        default=user_config_file,
        help="read config file (default: %(default)s)")

    ap.add_argument(
        "--logfile",
        metavar="LOGFILE",
        dest="logfile",
        action="store",
        default=None,
        help="also write the log to LOGFILE")


def set_arg_defaults(ap, config_file):
    # get default command-line args
    cp = configparser.ConfigParser()
    cp.read(config_file)
    if cp.has_section('DEFAULT_ARGS'):
        ap.set_defaults(**dict(cp.items('DEFAULT_ARGS')))


def parse_config_and_args(ap, sys_config, defaults=None, args=None):

    # put command-line args into options
    options.update(vars(ap.parse_args(args)))

    cp = configparser.ConfigParser()
    read = cp.read((sys_config, options.config_file))
    debug("Read config files: %s", ', '.join(read) or 'none')

    options.config = Struct()

    for name, value in (defaults or {}).items():
        setattr(options.config, name.upper(), value)

    for section in cp.sections():
        if section == 'DEFAULT_ARGS':
            continue
        for name, value in cp.items(section):
            setattr(options.config, name.upper(), value)

    return options


def is_url(path):
    return path.startswith('http://') or path.startswith('https://')


def path_from_url(url):
    """ Turn a file: url into a path. """
    if url.startswith('file://'):
        return url[7:]
    if url.startswith('file:'):
        return url[5:]
    return os.path.expanduser(url)
