"""
Click commands for vfshell.
"""
