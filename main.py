# main.py

# Running `python main.py` from the repository root is the same as running
# the installed `devinfo` command.
from device_info.cli.main import devinfo

if __name__ == '__main__':
    devinfo()
