"""Session-authenticated personal task list backend"""
