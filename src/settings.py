APP_NAME = "marathon-deploy"

DISPLAY_NAME = "Marathon Deployments"

LOGO = r"""
 __  __                  _   _                   
|  \/  | __ _ _ __ __ _| |_| |__   ___  _ __    
| |\/| |/ _` | '__/ _` | __| '_ \ / _ \| '_ \   
| |  | | (_| | | | (_| | |_| | | | (_) | | | |  
|_|  |_|\__,_|_|  \__,_|\__|_| |_|\___/|_| |_|  deploy
"""
