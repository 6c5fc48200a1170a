"""Supporting services"""
