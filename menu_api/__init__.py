"""Restaurant menu management API"""
