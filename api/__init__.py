"""api package"""
