"""
Cards domain module.

Cards hold saved content and the libraries it belongs to; collections
group cards under access control.
"""
