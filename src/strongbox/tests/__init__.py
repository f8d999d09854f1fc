"""strongbox unit and functional tests"""
