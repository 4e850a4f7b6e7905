from notestory.main import main

raise SystemExit(main())
