"""Camera acquisition, worker thread and window"""
