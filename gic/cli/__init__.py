"""Command Line Interface Package"""
