"""
Line-oriented stdin to collectd PUTNOTIF adapter.
"""
