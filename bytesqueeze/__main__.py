from bytesqueeze.cli import main

raise SystemExit(main())
