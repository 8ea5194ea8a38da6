# main.py

# Convenience launcher so the viewer can be started from a source checkout
# with `python main.py gui` without installing the package.
from node_viewer.main import main

if __name__ == '__main__':
    main()
