"""LDAP distinguished names as structured, comparable values"""
__version__ = "1.0.0"

__title__ = "ldapdn"
__description__ = "LDAP distinguished names as structured, comparable values"
__uri__ = "https://github.com/ldapdn/ldapdn"

__license__ = "MIT"
__author__ = "The ldapdn developers"
__copyright__ = "Copyright (c) 2026 {}".format(__author__)
