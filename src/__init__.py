"""
Package initializer for src.
Holds the todo_highlight engine plus shared logging and CLI helpers.
"""
