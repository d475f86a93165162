"""
DSCSA scan workbench support modules.
"""
