"""
Resource services
Each one checks the authorization policy before touching storage
"""
