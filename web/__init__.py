"""
Web API package
"""
