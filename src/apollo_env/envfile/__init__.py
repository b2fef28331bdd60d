from apollo_env.envfile.materializer import APP_PATH, create_env_file, resolve_env_path, set_env

__all__ = ["APP_PATH", "create_env_file", "resolve_env_path", "set_env"]
