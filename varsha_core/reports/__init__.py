"""Report generators"""
